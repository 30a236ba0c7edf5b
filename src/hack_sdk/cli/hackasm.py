"""
hackasm - Hack Assembler Command-Line Interface
===============================================

This module implements the command-line interface for the Hack
assembler.

Usage Examples
--------------
Basic assembly:
    $ hackasm Max.asm

With output file:
    $ hackasm Max.asm -o build/Max.hack

Generate all output files:
    $ hackasm Max.asm -o Max.hack -l Max.lst -s Max.sym

Pre-define a symbol:
    $ hackasm -D LIMIT=100 Max.asm

Verbose mode:
    $ hackasm -v Max.asm
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from hack_sdk import __version__
from hack_sdk.assembler import Assembler
from hack_sdk.cli.errors import ExitCode, handle_cli_exception
from hack_sdk.config import AssemblerConfig


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output .hack file (default: input.hack)",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "-D", "--define",
    multiple=True,
    help="Define symbol (format: NAME=VALUE)",
)
@click.option(
    "--variable-base",
    type=click.IntRange(min=0),
    default=None,
    help="First RAM address for variables. Default: 16 "
         "(or $HACKASM_VARIABLE_BASE).",
)
@click.option(
    "--allow-redefinition",
    is_flag=True,
    help="Let a later label rebind an already defined symbol "
         "instead of failing.",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_file: Path,
    output: Optional[Path],
    listing: Optional[Path],
    symbols: Optional[Path],
    define: tuple[str, ...],
    variable_base: Optional[int],
    allow_redefinition: bool,
    verbose: bool,
) -> None:
    """
    Assemble Hack source code.

    INPUT_FILE is the assembly source file (.asm) to assemble.

    The assembler writes one 16-bit binary word per line, the .hack
    format loaded by the nand2tetris CPU emulator.

    \b
    Examples:
        hackasm Max.asm              # Outputs Max.hack
        hackasm Max.asm -o out.hack  # Specify output file
        hackasm -s Max.sym Max.asm   # Also write the symbol table
    """
    setup_logging(verbose)

    config = AssemblerConfig.from_env()
    if variable_base is not None:
        config.variable_base = variable_base
    if allow_redefinition:
        config.allow_redefinition = True

    output_file = output if output is not None else input_file.with_suffix(".hack")

    asm = Assembler(config=config)

    # Parse and add defines
    for defn in define:
        name, sep, value_str = defn.partition("=")
        name = name.strip()
        value_str = value_str.strip()
        if not name:
            click.echo(f"Error: missing symbol name in -D {defn}", err=True)
            sys.exit(ExitCode.INVALID_ARGS)
        try:
            if not sep:
                # Symbol without value defaults to 1
                value = 1
            elif value_str.startswith(("0x", "0X")):
                value = int(value_str[2:], 16)
            else:
                value = int(value_str)
        except ValueError:
            click.echo(f"Error: invalid value in -D {defn}", err=True)
            sys.exit(ExitCode.INVALID_ARGS)
        try:
            asm.define_symbol(name, value)
        except Exception as e:
            handle_cli_exception(e, verbose=verbose, error_type="Assembly")

    try:
        if verbose:
            click.echo(f"Assembling {input_file}...")

        code = asm.assemble_file(input_file)
        asm.write_hack(output_file)

        if verbose:
            click.echo(f"Wrote {len(code)} words to {output_file}")

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if verbose:
            click.echo(
                f"Assembly complete: {len(code)} instructions, "
                f"{len(asm.get_symbols())} symbols"
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
