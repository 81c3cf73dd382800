"""
Hatchling Machine Dump
======================

Formats the post-run register and memory dump. The dump only reads the
machine state; it is produced after the CPU has stopped.

Layout::

    REGISTERS
    ACC         0005
    InstCtr       04
    InstReg     FF00
    OpCode        FF
    Operand       00

    Memory:
            0       1       2  ...       F
     0   4005    1006    4107  ...    0000
    10   0000    0000    0000  ...    0000
    ...

Copyright (c) 2025 Hatchling Simulator Contributors
"""

from typing import List

from hatchling_sim.machine import MachineState
from hatchling_sim.machine.words import MEMORY_SIZE, format_byte, format_word

WORDS_PER_ROW = 16


def format_registers(state: MachineState) -> List[str]:
    """Format the register block, one line per register."""
    return [
        "REGISTERS",
        f"ACC         {format_word(state.accumulator)}",
        f"InstCtr       {format_byte(state.instruction_counter)}",
        f"InstReg     {format_word(state.instruction_register)}",
        f"OpCode        {format_byte(state.opcode)}",
        f"Operand       {format_byte(state.operand)}",
    ]


def format_memory(state: MachineState) -> List[str]:
    """Format memory as a 16x16 grid of words with hex row/column labels."""
    header = "    " + "".join(f"{col:5X}   " for col in range(WORDS_PER_ROW))
    lines = ["Memory:", header.rstrip()]
    for base in range(0, MEMORY_SIZE, WORDS_PER_ROW):
        row = state.memory[base:base + WORDS_PER_ROW]
        cells = "    ".join(format_word(word) for word in row)
        lines.append(f"{base:2X}   {cells}")
    return lines


def format_dump(state: MachineState) -> str:
    """
    Format the complete machine dump.

    Returns:
        Multi-line string (no trailing newline)
    """
    return "\n".join(format_registers(state) + [""] + format_memory(state))
