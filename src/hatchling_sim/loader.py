"""
Hatchling Program Loader
========================

Builds a populated MachineState from program text.

Program Format (.hml)
---------------------
One 16-bit word per line, in unprefixed hexadecimal, loaded into memory
starting at address 00:

    4005        ; address 00: LOAD 05
    1006        ; address 01: ADD 06
    4107        ; address 02: STOR 07
    5107        ; address 03: WRTE 07
    FF00        ; address 04: HALT
    0002        ; address 05
    0003        ; address 06

(The "; ..." annotations above are for the reader only; program files
contain nothing but the words.) Blank lines are skipped. Memory not covered
by the program stays zero.

Interactive entry prompts with the next address and reads one word per
line until the sentinel token (-99999 by default).

Validation
----------
Loading is all-or-nothing. A token that is not hexadecimal, a value outside
[0000-FFFF], or more than 256 words raises a LoadError before any
instruction can run.

Copyright (c) 2025 Hatchling Simulator Contributors
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from hatchling_sim.errors import ProgramFormatError, ProgramSizeError
from hatchling_sim.machine import ConsoleProtocol, MachineState
from hatchling_sim.machine.words import MEMORY_SIZE, is_valid_word, parse_hex

logger = logging.getLogger(__name__)

DEFAULT_SENTINEL = "-99999"


def parse_word(token: str, line: Optional[int] = None, source: Optional[str] = None) -> int:
    """
    Parse one program word.

    Args:
        token: Hexadecimal text, e.g. "1005"
        line: Memory address the word is destined for (for error messages)
        source: File name or "<stdin>" (for error messages)

    Returns:
        The word as an unsigned 16-bit integer

    Raises:
        ProgramFormatError: If the token is not hexadecimal or is out of range
    """
    try:
        value = parse_hex(token)
    except ValueError:
        raise ProgramFormatError(token.strip(), source=source, line=line) from None

    if not is_valid_word(value):
        raise ProgramFormatError(token.strip(), source=source, line=line)
    return value


def load_lines(
    lines: Iterable[str],
    source: str = "<input>",
    sentinel: Optional[str] = None,
) -> MachineState:
    """
    Load a program from an iterable of text lines.

    Args:
        lines: Lines of program text, one word each
        source: Name used in error messages
        sentinel: Optional token that ends the program early

    Returns:
        MachineState with memory populated from address 0

    Raises:
        ProgramFormatError: On a malformed or out-of-range word
        ProgramSizeError: If the program has more than 256 words
    """
    words: List[int] = []

    for text in lines:
        token = text.strip()
        if not token:
            continue
        if sentinel is not None and token == sentinel:
            logger.debug(f"{source}: sentinel after {len(words)} word(s)")
            break
        if len(words) >= MEMORY_SIZE:
            raise ProgramSizeError(len(words) + 1, MEMORY_SIZE, source=source)
        words.append(parse_word(token, line=len(words), source=source))

    logger.debug(f"{source}: loaded {len(words)} word(s)")
    return MachineState.from_words(words)


def load_file(path: Union[str, Path]) -> MachineState:
    """
    Load a program from an .hml file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ProgramFormatError: On a malformed or out-of-range word
        ProgramSizeError: If the program has more than 256 words
    """
    path = Path(path)
    logger.info(f"Loading program from {path}")
    with path.open("r", encoding="ascii", errors="replace") as f:
        return load_lines(f, source=path.name)


def load_interactive(
    console: ConsoleProtocol,
    sentinel: str = DEFAULT_SENTINEL,
) -> MachineState:
    """
    Load a program typed at the terminal.

    Each prompt shows the address the next word goes to. Entry ends when
    the sentinel is typed.

    Example session:
        00    4002
        01    FF00
        02    0007
        03    -99999

    Raises:
        ProgramFormatError: On a malformed or out-of-range word
        ProgramSizeError: If more than 256 words are entered
    """
    words: List[int] = []

    while True:
        token = console.prompt(f"{len(words):02X}    ").strip()
        if token == sentinel:
            break
        if len(words) >= MEMORY_SIZE:
            raise ProgramSizeError(len(words) + 1, MEMORY_SIZE, source="<stdin>")
        words.append(parse_word(token, line=len(words), source="<stdin>"))

    logger.debug(f"<stdin>: loaded {len(words)} word(s)")
    return MachineState.from_words(words)
