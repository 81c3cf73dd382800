#!/usr/bin/env python3
"""
Hatchling Machine Demo
======================

This script demonstrates how to use the hatchling_sim package to:
1. Assemble a program from opcodes
2. Run it and inspect the result
3. Step through a program one instruction at a time
4. Catch a fatal run-time error
5. Print the machine dump

Usage:
    source .venv/bin/activate
    python examples/machine_demo.py

Copyright (c) 2025 Hatchling Simulator Contributors
"""

from pathlib import Path

from hatchling_sim import (
    HatchlingCPU,
    MachineState,
    Opcode,
    encode,
    format_dump,
    load_file,
)


def main():
    # ==========================================================================
    # 1. Assemble a program
    # ==========================================================================
    # Every instruction is one word: opcode in the high byte, memory
    # address in the low byte. Data words follow the code.

    program = [
        encode(Opcode.LOAD, 0x06),   # 00  ACC = mem[06]
        encode(Opcode.MUL, 0x07),    # 01  ACC *= mem[07]
        encode(Opcode.STOR, 0x08),   # 02  mem[08] = ACC
        encode(Opcode.WRTE, 0x08),   # 03  print mem[08]
        encode(Opcode.HALT),         # 04
        0x0000,                      # 05
        0xFFFA,                      # 06  -6
        0x0007,                      # 07  7
    ]

    print("Program:")
    state = MachineState.from_words(program)
    for address, word in enumerate(program[:5]):
        print(f"  {address:02X}  {word:04X}")

    # ==========================================================================
    # 2. Run to HALT
    # ==========================================================================
    print("\nRunning...")
    result = HatchlingCPU(state).run()
    print(f"  {result} after {result.instructions} instructions")
    print(f"  ACC = {state.accumulator}")

    # ==========================================================================
    # 3. Single-step
    # ==========================================================================
    print("\nStepping...")
    state = MachineState.from_words(program)
    cpu = HatchlingCPU(state)
    while cpu.step() is None:
        print(f"  IC={state.instruction_counter:02X}  ACC={state.accumulator}")

    # ==========================================================================
    # 4. Fatal errors
    # ==========================================================================
    # Overflow freezes the machine: nothing from the failing instruction
    # is committed.
    print("\nOverflowing...")
    state = MachineState.from_words([
        encode(Opcode.LOAD, 0x03),
        encode(Opcode.LSL),
        encode(Opcode.SUB, 0x03),
        0x4000,
    ])
    result = HatchlingCPU(state).run()
    print(f"  {result}, fatal_error={state.fatal_error}")

    # ==========================================================================
    # 5. Dump
    # ==========================================================================
    countdown = Path(__file__).parent / "countdown.hml"
    if countdown.exists():
        print(f"\nRunning {countdown.name}...")
        state = load_file(countdown)
        HatchlingCPU(state).run()
        print()
        print(format_dump(state))


if __name__ == "__main__":
    main()
