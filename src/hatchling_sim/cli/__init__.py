"""
Hatchling Command-Line Interface
================================

This package provides the command-line tool for the Hatchling simulator:

- **hmlsim**: load and run a Hatchling program, then dump the machine

The tool is a Click-based CLI application with help text and unified
error reporting (see errors.py).
"""

__all__ = ["hmlsim"]
