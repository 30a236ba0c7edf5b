"""
CLI Error Reporting
===================

Maps exceptions raised while assembling to a message on stderr and a
process exit code.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from hack_sdk.errors import HackError


class ExitCode(IntEnum):
    """Exit codes returned by hackasm."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Source failed to assemble
    INVALID_ARGS = 2     # Bad option value, unreadable or missing file
    INTERNAL_ERROR = 3   # Bug in the assembler itself


def exit_code_for(error: Exception) -> ExitCode:
    """Classify an exception raised during a CLI run."""
    if isinstance(error, HackError):
        return ExitCode.BUILD_ERROR
    if isinstance(error, (click.BadParameter, FileNotFoundError, PermissionError)):
        return ExitCode.INVALID_ARGS
    return ExitCode.INTERNAL_ERROR


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report an exception and exit.

    Assembly errors are printed with their source context, prefixed with
    `error_type` (e.g. "Assembly error: ..."). Unexpected exceptions print
    a traceback when `verbose` is set.

    Raises:
        SystemExit: Always
    """
    code = exit_code_for(error)

    if code == ExitCode.BUILD_ERROR:
        prefix = f"{error_type} error: " if error_type else "Error: "
        click.echo(f"{prefix}{error}", err=True)
    elif code == ExitCode.INVALID_ARGS:
        click.echo(f"Error: {error}", err=True)
    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()

    sys.exit(code)
