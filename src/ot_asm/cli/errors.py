"""
CLI Error Handling
==================

Maps exceptions raised during an otasm run to a message on stderr and a
process exit code.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from ot_asm.errors import OtAsmError


class ExitCode(IntEnum):
    """Exit codes returned by otasm."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Source could not be assembled
    INVALID_ARGS = 2     # Bad arguments or an I/O failure
    INTERNAL_ERROR = 3   # Bug in the assembler


# First matching entry wins
_EXIT_CODES: tuple[tuple[type[BaseException], ExitCode], ...] = (
    (OtAsmError, ExitCode.BUILD_ERROR),
    (click.BadParameter, ExitCode.INVALID_ARGS),
    (OSError, ExitCode.INVALID_ARGS),
    # Undecodable source counts as a read failure
    (UnicodeDecodeError, ExitCode.INVALID_ARGS),
)


def exit_code_for(error: BaseException) -> ExitCode:
    """Return the exit code for an exception raised during a run."""
    for error_class, code in _EXIT_CODES:
        if isinstance(error, error_class):
            return code
    return ExitCode.INTERNAL_ERROR


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None,
) -> NoReturn:
    """
    Report an exception and exit.

    Assembler errors are prefixed with ``error_type`` (e.g. "Assembly error:").
    Unexpected exceptions print a traceback when verbose is set.

    Raises:
        SystemExit: Always
    """
    code = exit_code_for(error)

    if code is ExitCode.BUILD_ERROR and error_type:
        click.echo(f"{error_type} error: {error}", err=True)
    elif code is ExitCode.INTERNAL_ERROR:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
    else:
        click.echo(f"Error: {error}", err=True)

    sys.exit(code)
