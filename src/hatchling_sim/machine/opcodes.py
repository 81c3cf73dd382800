"""
Hatchling Opcode Table
======================

Byte values and mnemonics for the Hatchling instruction set. Every
instruction is one 16-bit word: the high byte selects the operation and the
low byte is a direct memory address.

    Group          Opcodes
    -----------    ----------------------------------------
    Arithmetic     ADD 10  SUB 11  MUL 12  DIV 13  MOD 14
    Logic          AND 20  ORR 21  NOT 22  XOR 23
    Shift          LSR 24  ASR 25  LSL 26
    Branch         B 30    BNEG 31 BPOS 32 BZRO 33
    Load/Store     LOAD 40 STOR 41
    Terminal I/O   READ 50 WRTE 51
    Control        HALT FF

Any byte not listed is undefined and stops the machine with a fatal error.

Copyright (c) 2025 Hatchling Simulator Contributors
"""

from enum import IntEnum
from typing import Optional


class Opcode(IntEnum):
    """Defined Hatchling opcodes. Member names are the assembler mnemonics."""

    # ACC-MEM arithmetic
    ADD = 0x10
    SUB = 0x11
    MUL = 0x12
    DIV = 0x13
    MOD = 0x14

    # ACC-MEM logic
    AND = 0x20
    ORR = 0x21
    NOT = 0x22
    XOR = 0x23
    LSR = 0x24
    ASR = 0x25
    LSL = 0x26

    # Branches
    B = 0x30
    BNEG = 0x31
    BPOS = 0x32
    BZRO = 0x33

    # Load/store
    LOAD = 0x40
    STOR = 0x41

    # Terminal I/O
    READ = 0x50
    WRTE = 0x51

    HALT = 0xFF

    @property
    def mnemonic(self) -> str:
        return self.name

    @classmethod
    def lookup(cls, value: int) -> Optional["Opcode"]:
        """Return the Opcode for a byte, or None if the byte is undefined."""
        try:
            return cls(value)
        except ValueError:
            return None

