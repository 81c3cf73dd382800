"""
Hatchling Error Hierarchy
=========================

This module defines the exception hierarchy for the Hatchling simulator.
All exceptions inherit from HatchlingError, allowing callers to catch all
simulator-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
HatchlingError (base)
├── LoadError (program loading)
│   ├── ProgramFormatError - token is not a hex word in [0000-FFFF]
│   └── ProgramSizeError - program does not fit in 256 words
└── ConfigError - invalid simulator configuration

Design Philosophy
-----------------
Only conditions that abort the process *before* execution starts are
exceptions. Run-time faults (accumulator overflow, divide by zero, undefined
opcode) are not raised: the CPU records them in the machine state and
reports them through a RunResult, so callers always get to inspect the
frozen machine afterwards.

Error messages follow this format:
    filename:line: error: description
    hint: suggestion for fixing (when available)
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HatchlingError(Exception):
    """
    Base exception for all Hatchling simulator errors.

    Catch this to handle every error the package raises:

        try:
            state = load_file("program.hml")
        except HatchlingError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Loader Exceptions
# =============================================================================

class LoadError(HatchlingError):
    """
    Base exception for program loading errors.

    Loading errors are unrecoverable: the simulator must stop before any
    instruction executes.

    Attributes:
        message: The error description
        source: File name, or "<stdin>" for interactive entry (optional)
        line: Zero-based memory address the bad word was destined for (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        line: Optional[int] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.source = source
        self.line = line
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

        Example output:
            prog.hml:0A: error: bad instruction 'XYZ'
            hint: instruction words must be in range [0000-FFFF]
        """
        parts = []

        if self.source is not None and self.line is not None:
            parts.append(f"{self.source}:{self.line:02X}: error: {self.message}")
        elif self.line is not None:
            parts.append(f"line {self.line:02X}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class ProgramFormatError(LoadError):
    """
    A program word failed to parse.

    Raised when a token is not a hexadecimal integer, or when its value
    lies outside [0x0000, 0xFFFF].

    Examples:
        - "12G4" (not hexadecimal)
        - "10000" (too large for a 16-bit word)
        - "-1" (negative words cannot be loaded)
    """

    def __init__(
        self,
        token: str,
        source: Optional[str] = None,
        line: Optional[int] = None,
    ):
        self.token = token
        super().__init__(
            f"bad instruction {token!r}",
            source=source,
            line=line,
            hint="instruction words must be hexadecimal in range [0000-FFFF]",
        )


class ProgramSizeError(LoadError):
    """
    The program has more words than memory can hold.

    Attributes:
        size: Number of words the program tried to load
        capacity: Number of words available (always 256)
    """

    def __init__(self, size: int, capacity: int, source: Optional[str] = None):
        self.size = size
        self.capacity = capacity
        super().__init__(
            f"program has {size} words, memory holds {capacity}",
            source=source,
        )


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigError(HatchlingError):
    """
    Invalid simulator configuration.

    Raised by SimulatorConfig.validate() for unknown shift modes, negative
    instruction limits or empty sentinels.
    """
    pass
