"""
Hatchling Word and Register Model
=================================

Storage units of the Hatchling machine and the rules for reinterpreting
them as signed or unsigned quantities.

- Memory word: 16-bit, stored as a raw unsigned bit pattern (0x0000-0xFFFF)
- Accumulator: signed 16-bit (-32768 to 32767)
- Instruction counter / opcode / operand: unsigned 8-bit (0x00-0xFF)

Python ints have no fixed width, so every value crossing one of these
boundaries goes through a helper in this module. Each instruction decides
which view of a word it consumes: arithmetic reads words as signed, logic
reads the raw pattern.

Copyright (c) 2025 Hatchling Simulator Contributors
"""

import re

WORD_MASK = 0xFFFF
BYTE_MASK = 0xFF
SIGN_BIT = 0x8000

WORD_MIN = 0x0000
WORD_MAX = 0xFFFF
SIGNED_MIN = -32768
SIGNED_MAX = 32767

MEMORY_SIZE = 256

# Sign, optional 0x prefix, ASCII hex digits only
HEX_PATTERN = re.compile(r"[+-]?(0[xX])?[0-9A-Fa-f]+")


def to_signed16(value: int) -> int:
    """
    Reinterpret the low 16 bits of value as a two's-complement integer.

    >>> to_signed16(0xFFFF)
    -1
    >>> to_signed16(0x7FFF)
    32767
    """
    value &= WORD_MASK
    return value - 0x10000 if value & SIGN_BIT else value


def to_unsigned16(value: int) -> int:
    """Return the 16-bit bit pattern of value (two's complement for negatives)."""
    return value & WORD_MASK


def to_unsigned8(value: int) -> int:
    """Return the low 8 bits of value."""
    return value & BYTE_MASK


def fits_signed16(value: int) -> bool:
    """Check whether an exact result fits in the accumulator."""
    return SIGNED_MIN <= value <= SIGNED_MAX


def is_valid_word(value: int) -> bool:
    """Check whether value is a loadable memory word."""
    return WORD_MIN <= value <= WORD_MAX


def format_word(value: int) -> str:
    """
    Format a word as 4-digit two's-complement hexadecimal.

    Accepts either view of the word:

    >>> format_word(-1)
    'FFFF'
    >>> format_word(0x1005)
    '1005'
    """
    return f"{to_unsigned16(value):04X}"


def format_byte(value: int) -> str:
    """Format an 8-bit quantity as 2-digit hexadecimal."""
    return f"{to_unsigned8(value):02X}"


def parse_hex(text: str) -> int:
    """
    Parse a hexadecimal token, as typed at the terminal or read from a file.

    Surrounding whitespace, a leading sign and an optional 0x prefix are
    accepted. Range is not checked; each caller applies its own limits.

    >>> parse_hex("1005")
    4101
    >>> parse_hex("-7fff")
    -32767

    Raises:
        ValueError: If the token is empty or not hexadecimal
    """
    token = text.strip()
    if not HEX_PATTERN.fullmatch(token):
        raise ValueError(f"not a hexadecimal number: {text!r}")
    return int(token, 16)
