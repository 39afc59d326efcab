"""
otasm - OT Assembler Command-Line Interface
===========================================

This module implements the command-line interface for the OT assembler.

Usage Examples
--------------
Basic assembly (writes loop.out):
    $ otasm loop.ot

Read from standard input (writes stdin.out):
    $ otasm - < loop.ot

With output file:
    $ otasm loop.ot -o build/loop.lst

Raw binary image plus symbol table:
    $ otasm -f binary loop.ot -s loop.sym

Verbose mode:
    $ otasm -v loop.ot
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from ot_asm import __version__
from ot_asm.assembler import Assembler
from ot_asm.cli.errors import handle_cli_exception
from ot_asm.config import AssemblerConfig, OUTPUT_FORMATS, STDIN_STEM

logger = logging.getLogger(__name__)

STDIN_ARGUMENT = Path("-")


# =============================================================================
# Helpers
# =============================================================================

def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def resolve_output_path(
    output: Optional[Path],
    input_file: Path,
    extension: str,
) -> Path:
    """
    Determine the output file path.

    If no output is specified, the input path is reused with its
    extension replaced; input from standard input is named after STDIN_STEM
    in the current directory.

    Examples:
        loop.ot    -> loop.out
        src/a.asm  -> src/a.out
        -          -> stdin.out
    """
    if output is not None:
        return output

    if input_file == STDIN_ARGUMENT:
        return Path(STDIN_STEM).with_suffix(extension)

    return input_file.with_suffix(extension)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: input with .out, or .bin for binary)",
)
@click.option(
    "-f", "--format", "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default=None,
    help="Output format: annotated decimal listing or raw binary. "
         "Default: listing, or $OTASM_FORMAT.",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "--allow-redefinition",
    is_flag=True,
    help="Let a label be defined more than once; the last definition wins",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="otasm")
def main(
    input_file: Path,
    output: Optional[Path],
    output_format: Optional[str],
    symbols: Optional[Path],
    allow_redefinition: bool,
    verbose: bool,
) -> None:
    """
    Assemble OT source code.

    INPUT_FILE is the assembly source file, or - to read standard input.

    \b
    Examples:
        otasm loop.ot               # Outputs loop.out
        otasm loop.ot -o out.lst    # Specify output file
        otasm -f binary loop.ot     # Outputs loop.bin
        otasm - < loop.ot           # Outputs stdin.out
    """
    config = AssemblerConfig.from_env()
    if output_format is not None:
        config.output_format = output_format.lower()
    if allow_redefinition:
        config.allow_redefinition = True
    if verbose:
        config.verbose = True

    setup_logging(config.verbose)

    output_file = resolve_output_path(output, input_file, config.output_extension)
    asm = Assembler(config)

    try:
        if input_file == STDIN_ARGUMENT:
            logger.debug("Reading source from standard input")
            asm.assemble_stream(sys.stdin, "<stdin>")
        else:
            logger.debug("Assembling %s", input_file)
            asm.assemble_file(input_file)

        asm.write_output(output_file)

        if symbols:
            asm.write_symbols(symbols)

        if config.verbose:
            code = asm.get_code()
            click.echo(f"Assembly complete: {len(code)} bytes")
            click.echo(f"Defined {len(asm.get_symbols())} labels")
            click.echo(f"Wrote {config.output_format} to {output_file}")

    except Exception as e:
        handle_cli_exception(e, verbose=config.verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
