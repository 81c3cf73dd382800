"""
Terminal I/O for the Hatchling Machine
======================================

READ and WRTE talk to a terminal. The CPU does not touch stdin/stdout
directly; it goes through an object implementing ConsoleProtocol.

ClickConsole is the real terminal, built on click. Tests substitute a
scripted fake.

Copyright (c) 2025 Hatchling Simulator Contributors
"""

from typing import Protocol

import click


class ConsoleProtocol(Protocol):
    """
    Protocol defining the terminal interface.

    The CPU interacts with the user through this interface.
    """
    def prompt(self, text: str) -> str:
        """Show text and block until one line of input is read."""
        ...

    def write(self, line: str) -> None:
        """Write one line of output."""
        ...


class ClickConsole:
    """
    Console backed by the process terminal.

    Output goes to stdout via click.echo; prompts use click.prompt without
    click's default ": " suffix so the machine controls the exact text.

    Example:
        >>> console = ClickConsole()
        >>> console.write("OUTPUT: 0007 (REPRESENTED IN BASE 16, 2'S COMPLEMENT)")
    """

    def __init__(self, err: bool = False):
        """
        Args:
            err: Write output to stderr instead of stdout
        """
        self.err = err

    def prompt(self, text: str) -> str:
        return click.prompt(text, prompt_suffix="", show_default=False, err=self.err)

    def write(self, line: str) -> None:
        click.echo(line, err=self.err)
