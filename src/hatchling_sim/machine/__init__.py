"""
Hatchling Machine
=================

The core of the simulator: word model, decoder, machine state, opcode
executor and execution loop.

Quick Start
-----------

    >>> from hatchling_sim.machine import HatchlingCPU, MachineState
    >>> state = MachineState.from_words([0x4003, 0x1004, 0xFF00, 0x0002, 0x0003])
    >>> result = HatchlingCPU(state).run()
    >>> result.halted, state.accumulator
    (True, 5)

Module Structure
----------------

- `words.py`: 16-bit word / signed accumulator / 8-bit counter helpers
- `opcodes.py`: Opcode enumeration
- `decoder.py`: instruction word -> (opcode, operand)
- `state.py`: MachineState
- `events.py`: StopReason and RunResult
- `console.py`: terminal seam used by READ/WRTE
- `cpu.py`: dispatch table and fetch-decode-execute loop

Copyright (c) 2025 Hatchling Simulator Contributors
"""

from .cpu import HatchlingCPU, LSR_LOGICAL, LSR_MODES, LSR_SIGNED
from .console import ClickConsole, ConsoleProtocol
from .decoder import Instruction, decode, encode
from .events import RunResult, StopReason
from .opcodes import Opcode
from .state import MachineState, Registers
from .words import (
    MEMORY_SIZE,
    SIGNED_MAX,
    SIGNED_MIN,
    fits_signed16,
    format_word,
    parse_hex,
    to_signed16,
    to_unsigned16,
)

__all__ = [
    # Execution
    "HatchlingCPU",
    "LSR_SIGNED",
    "LSR_LOGICAL",
    "LSR_MODES",
    "RunResult",
    "StopReason",

    # State
    "MachineState",
    "Registers",

    # Decoding
    "Instruction",
    "Opcode",
    "decode",
    "encode",

    # Terminal
    "ConsoleProtocol",
    "ClickConsole",

    # Words
    "MEMORY_SIZE",
    "SIGNED_MIN",
    "SIGNED_MAX",
    "fits_signed16",
    "format_word",
    "parse_hex",
    "to_signed16",
    "to_unsigned16",
]
