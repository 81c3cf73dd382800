"""
Hatchling Test Configuration
============================

Shared fixtures for the Hatchling test suite.

It provides:
- ScriptedConsole, a terminal fake that replays READ/loader input and
  records everything written
- a `machine` factory fixture that builds state + CPU from a word list

Copyright (c) 2025 Hatchling Simulator Contributors
"""

from typing import Iterable, List, Optional

import pytest

from hatchling_sim.machine import HatchlingCPU, MachineState


# =============================================================================
# Scripted Console for CPU Testing
# =============================================================================

class ScriptedConsole:
    """
    Console fake for tests.

    Replays a fixed list of input lines and records all prompts and
    output lines for verification.
    """

    def __init__(self, inputs: Iterable[str] = ()):
        self._inputs: List[str] = list(inputs)
        self.prompts: List[str] = []
        self.output: List[str] = []

    def feed(self, *lines: str) -> "ScriptedConsole":
        """Append more scripted input lines."""
        self._inputs.extend(lines)
        return self

    def prompt(self, text: str) -> str:
        """Return the next scripted line."""
        self.prompts.append(text)
        if not self._inputs:
            raise AssertionError(f"unexpected prompt {text!r}: no scripted input left")
        return self._inputs.pop(0)

    def write(self, line: str) -> None:
        """Record an output line."""
        self.output.append(line)

    @property
    def remaining(self) -> int:
        """Number of scripted lines not yet consumed."""
        return len(self._inputs)


class Machine:
    """A state/CPU/console triple built from a program word list."""

    def __init__(self, words: Iterable[int], inputs: Iterable[str] = (), lsr_mode: str = "signed"):
        self.state = MachineState.from_words(words)
        self.console = ScriptedConsole(inputs)
        self.cpu = HatchlingCPU(self.state, console=self.console, lsr_mode=lsr_mode)

    def poke(self, address: int, word: int) -> "Machine":
        """Store a raw word (negative values stored as two's complement)."""
        self.state.write_word(address, word)
        return self


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def console() -> ScriptedConsole:
    """Create an empty scripted console."""
    return ScriptedConsole()


@pytest.fixture
def machine():
    """
    Factory fixture: machine(words, inputs=(), lsr_mode="signed") -> Machine.

    Example:
        m = machine([encode(Opcode.LOAD, 0x10), 0xFF00])
        m.poke(0x10, 7)
        m.cpu.run()
    """
    def _make(words: Iterable[int] = (), inputs: Iterable[str] = (), lsr_mode: Optional[str] = None):
        return Machine(words, inputs=inputs, lsr_mode=lsr_mode or "signed")
    return _make
