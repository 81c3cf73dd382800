"""
Run Outcome Reporting
=====================

A Hatchling run ends in exactly one way: a HALT instruction, a fatal
run-time error, or (only when the caller asked for one) an instruction
limit. The CPU reports which through a RunResult instead of raising, so the
caller can always inspect and dump the frozen machine state.

Example usage:

    >>> result = cpu.run()
    >>> if result.fatal:
    ...     print(f"Stopped at ${result.address:02X}: {result}")

Copyright (c) 2025 Hatchling Simulator Contributors
"""

from dataclasses import dataclass
from enum import Enum, auto


class StopReason(Enum):
    """
    Enumeration of reasons why execution stopped.

    Used in RunResult to indicate what ended the run.
    """
    HALT = auto()                  # HALT instruction executed
    ACCUMULATOR_OVERFLOW = auto()  # Arithmetic result out of signed 16-bit range
    DIVIDE_BY_ZERO = auto()        # DIV/MOD with a zero divisor word
    UNDEFINED_OPCODE = auto()      # Opcode byte not in the instruction set
    INSTRUCTION_LIMIT = auto()     # Caller-supplied instruction limit reached

    @property
    def is_fatal(self) -> bool:
        """True for the run-time errors that set the fatal flag."""
        return self in FATAL_REASONS


FATAL_REASONS = frozenset({
    StopReason.ACCUMULATOR_OVERFLOW,
    StopReason.DIVIDE_BY_ZERO,
    StopReason.UNDEFINED_OPCODE,
})

# Console diagnostics, worded as the reference Hatchling simulator prints them
FATAL_MESSAGES = {
    StopReason.ACCUMULATOR_OVERFLOW: "*** ACCUMULATOR OVERFLOW ***",
    StopReason.DIVIDE_BY_ZERO: "*** ATTEMPT TO DIVIDE BY ZERO ***",
    StopReason.UNDEFINED_OPCODE: "*** UNDEFINED HATCHLING OPCODE ***",
}
ABNORMAL_TERMINATION = "*** HATCHLING EXECUTION ABNORMALLY TERMINATED ***"


@dataclass(frozen=True)
class RunResult:
    """
    Information about why execution stopped.

    Attributes:
        reason: Why execution stopped
        address: Instruction counter at the stopping instruction
        instructions: Number of instructions fetched during the run
    """
    reason: StopReason
    address: int
    instructions: int

    @property
    def fatal(self) -> bool:
        return self.reason.is_fatal

    @property
    def halted(self) -> bool:
        return self.reason is StopReason.HALT

    def __str__(self) -> str:
        match self.reason:
            case StopReason.HALT:
                return f"Halted at ${self.address:02X}"
            case StopReason.ACCUMULATOR_OVERFLOW:
                return f"Accumulator overflow at ${self.address:02X}"
            case StopReason.DIVIDE_BY_ZERO:
                return f"Divide by zero at ${self.address:02X}"
            case StopReason.UNDEFINED_OPCODE:
                return f"Undefined opcode at ${self.address:02X}"
            case StopReason.INSTRUCTION_LIMIT:
                return f"Instruction limit ({self.instructions}) reached at ${self.address:02X}"
            case _:
                return "Unknown"
