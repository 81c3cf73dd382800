"""
hmlsim - Hatchling Simulator Command-Line Interface
===================================================

This module implements the command-line interface for the Hatchling
simulator. It loads a program, runs it to completion and prints the
register/memory dump.

Usage Examples
--------------
Run a program file:
    $ hmlsim program.hml

Type the program in (end with -99999):
    $ hmlsim
    00    5010
    01    5110
    02    FF00
    03    -99999

Stop runaway programs after 10000 instructions:
    $ hmlsim loop.hml --max-instructions 10000

Use a zero-filling LSR instead of the signed shift:
    $ hmlsim shifts.hml --lsr-mode logical

Exit Codes
----------
0 - Program halted normally
1 - Load error, fatal run-time error, end of input, or instruction limit reached
2 - Invalid arguments or configuration
3 - Internal error
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from hatchling_sim import __version__
from hatchling_sim.cli.errors import ExitCode, handle_cli_exception
from hatchling_sim.config import SimulatorConfig
from hatchling_sim.dump import format_dump
from hatchling_sim.loader import load_file, load_interactive
from hatchling_sim.machine import (
    ClickConsole,
    HatchlingCPU,
    LSR_MODES,
    RunResult,
    StopReason,
)

logger = logging.getLogger(__name__)


def setup_logging(config: SimulatorConfig, verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else config.logging_level
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(levelname)s: %(message)s",
        force=True,
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "program",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-n", "--max-instructions",
    type=click.IntRange(min=0),
    default=None,
    help="Stop after this many instructions (default: no limit)",
)
@click.option(
    "--lsr-mode",
    type=click.Choice(LSR_MODES, case_sensitive=False),
    default=None,
    help="LSR behavior: 'signed' copies the sign bit (default), "
         "'logical' shifts in a zero",
)
@click.option(
    "--sentinel",
    default=None,
    help="Token that ends interactive program entry (default: -99999)",
)
@click.option(
    "--dump/--no-dump",
    default=None,
    help="Print the register and memory dump after the run (default: on)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (trace every instruction)",
)
@click.version_option(version=__version__, prog_name="hmlsim")
def main(
    program: Optional[Path],
    max_instructions: Optional[int],
    lsr_mode: Optional[str],
    sentinel: Optional[str],
    dump: Optional[bool],
    verbose: bool,
) -> None:
    """
    Run a Hatchling machine-language program.

    PROGRAM is an .hml file with one hexadecimal word per line. Without
    PROGRAM, words are read from the terminal until the sentinel.

    \b
    Examples:
        hmlsim program.hml
        hmlsim program.hml --max-instructions 10000
        hmlsim --sentinel END
    """
    try:
        config = SimulatorConfig.from_env().with_overrides(
            max_instructions=max_instructions,
            lsr_mode=lsr_mode.lower() if lsr_mode else None,
            sentinel=sentinel,
            show_dump=dump,
        ).validate()
    except Exception as e:
        handle_cli_exception(e, verbose=verbose)

    setup_logging(config, verbose)
    console = ClickConsole()

    # Load
    try:
        if program is not None:
            state = load_file(program)
        else:
            state = load_interactive(console, sentinel=config.sentinel)
    except (click.Abort, EOFError):
        click.echo(f"Aborted: input ended before the sentinel {config.sentinel}", err=True)
        sys.exit(ExitCode.PROGRAM_ERROR)
    except Exception as e:
        handle_cli_exception(e, verbose=verbose)

    click.echo("*** PROGRAM LOADING COMPLETED ***")
    click.echo("*** PROGRAM EXECUTION BEGINS ***")

    # Execute
    result: Optional[RunResult] = None
    try:
        cpu = HatchlingCPU(state, console=console, lsr_mode=config.lsr_mode)
        result = cpu.run(max_instructions=config.max_instructions)
    except (click.Abort, EOFError):
        # READ hit end of input; the machine stays as it was before that READ
        logger.info(f"Input ended during READ at ${state.instruction_counter:02X}")
        click.echo()
        click.echo("*** END OF INPUT, EXECUTION STOPPED ***")
    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Execution")

    if result is not None and result.reason is StopReason.INSTRUCTION_LIMIT:
        click.echo(f"*** {str(result).upper()} ***")
    click.echo("*** PROGRAM EXECUTION TERMINATED ***")

    if config.show_dump:
        click.echo()
        click.echo(format_dump(state))

    if verbose and result is not None:
        click.echo(f"{result} after {result.instructions} instruction(s)", err=True)

    halted = result is not None and result.halted
    sys.exit(ExitCode.SUCCESS if halted else ExitCode.PROGRAM_ERROR)


if __name__ == "__main__":
    main()
