"""
Hatchling Simulator - Configuration
===================================

Run settings for the simulator. Configuration can come from:
- Default values (defined here)
- Environment variables (SimulatorConfig.from_env)
- Command-line options (applied by the hmlsim CLI on top of the above)

Defaults reproduce the reference machine exactly: signed LSR, no
instruction limit, "-99999" ends interactive entry.

Copyright (c) 2025 Hatchling Simulator Contributors
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Optional

from hatchling_sim.errors import ConfigError
from hatchling_sim.loader import DEFAULT_SENTINEL
from hatchling_sim.machine import LSR_MODES, LSR_SIGNED

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SimulatorConfig:
    """
    Configuration for a simulator run.

    Attributes:
        sentinel: Token that ends interactive program entry (default: "-99999")
        max_instructions: Stop after this many instructions; None runs until
            HALT or a fatal error (default: None)
        lsr_mode: "signed" shifts the signed accumulator, "logical" shifts
            the 16-bit pattern with zero fill (default: "signed")
        log_level: Logging level name for the CLI (default: "ERROR")
        show_dump: Print the register/memory dump after the run (default: True)
    """

    sentinel: str = DEFAULT_SENTINEL
    max_instructions: Optional[int] = None
    lsr_mode: str = LSR_SIGNED
    log_level: str = "ERROR"
    show_dump: bool = True

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls) -> "SimulatorConfig":
        """
        Create SimulatorConfig from environment variables.

        Environment variables (all optional):
            HATCHLING_SENTINEL: Interactive entry sentinel token
            HATCHLING_MAX_INSTRUCTIONS: Instruction limit (integer)
            HATCHLING_LSR_MODE: "signed" or "logical"
            HATCHLING_LOG_LEVEL: Logging level name (e.g. "DEBUG")

        Returns:
            SimulatorConfig with values from environment variables
        """
        config = cls()

        if sentinel := os.environ.get("HATCHLING_SENTINEL"):
            config.sentinel = sentinel

        if limit := os.environ.get("HATCHLING_MAX_INSTRUCTIONS"):
            try:
                config.max_instructions = int(limit)
            except ValueError:
                pass  # Ignore invalid values

        if lsr_mode := os.environ.get("HATCHLING_LSR_MODE"):
            config.lsr_mode = lsr_mode.lower()

        if log_level := os.environ.get("HATCHLING_LOG_LEVEL"):
            config.log_level = log_level.upper()

        return config

    def with_overrides(self, **overrides) -> "SimulatorConfig":
        """
        Return a copy with the given fields replaced.

        None values are skipped so unset CLI options keep the current value.
        """
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPER METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    def validate(self) -> "SimulatorConfig":
        """
        Check that every field holds a usable value.

        Returns:
            self, so calls can be chained

        Raises:
            ConfigError: On the first invalid field
        """
        if not self.sentinel.strip():
            raise ConfigError("sentinel must not be empty")
        if self.max_instructions is not None and self.max_instructions < 0:
            raise ConfigError(f"max_instructions must be >= 0, got {self.max_instructions}")
        if self.lsr_mode not in LSR_MODES:
            raise ConfigError(f"lsr_mode must be one of {LSR_MODES}, got {self.lsr_mode!r}")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {LOG_LEVELS}, got {self.log_level!r}")
        return self

    @property
    def logging_level(self) -> int:
        """The log_level name as a logging module constant."""
        return getattr(logging, self.log_level)
