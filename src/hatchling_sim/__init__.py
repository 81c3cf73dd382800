"""
Hatchling - Simulator for the Hatchling Machine Language
========================================================

This package runs programs written for Hatchling, a teaching machine with
a single signed 16-bit accumulator, 256 words of memory and a small fixed
instruction set (arithmetic, logic, shifts, branches, load/store and
terminal I/O).

Main Components
---------------
- **machine**: word model, decoder, machine state, CPU
    Fetch-decode-execute loop with exact overflow detection

- **loader**: program loading
    Reads .hml files or interactive entry into a MachineState

- **dump**: post-run register and memory dump

- **config**: SimulatorConfig with environment overrides

Quick Start
-----------
Run a program file:
    >>> from hatchling_sim import HatchlingCPU, load_file, format_dump
    >>> state = load_file("program.hml")
    >>> result = HatchlingCPU(state).run()
    >>> print(result)
    Halted at $04
    >>> print(format_dump(state))

Or use the command-line tool:
    $ hmlsim program.hml

Version History
---------------
1.0.0 - Initial release with CPU, loader, dump and hmlsim
"""

__version__ = "1.0.0"
__author__ = "Hatchling Simulator Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from hatchling_sim.errors import (
    HatchlingError,
    LoadError,
    ProgramFormatError,
    ProgramSizeError,
    ConfigError,
)

from hatchling_sim.machine import (
    HatchlingCPU,
    MachineState,
    Opcode,
    Instruction,
    RunResult,
    StopReason,
    ConsoleProtocol,
    ClickConsole,
    decode,
    encode,
)

from hatchling_sim.loader import (
    load_file,
    load_lines,
    load_interactive,
    parse_word,
)

from hatchling_sim.dump import format_dump
from hatchling_sim.config import SimulatorConfig

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Machine
    "HatchlingCPU",
    "MachineState",
    "Opcode",
    "Instruction",
    "RunResult",
    "StopReason",
    "ConsoleProtocol",
    "ClickConsole",
    "decode",
    "encode",
    # Loader
    "load_file",
    "load_lines",
    "load_interactive",
    "parse_word",
    # Dump / config
    "format_dump",
    "SimulatorConfig",
    # Exception hierarchy
    "HatchlingError",
    "LoadError",
    "ProgramFormatError",
    "ProgramSizeError",
    "ConfigError",
]
