"""
asm6502 - 6502 Assembler Command-Line Interface
===============================================

This module implements the command-line interface for the assembler.

Usage Examples
--------------
Basic assembly (writes prog.bin):
    $ asm6502 prog.asm

Generate all output files:
    $ asm6502 prog.asm -o prog.bin -l prog.lst -s prog.sym

Assemble for a load address, with a custom opcode table:
    $ asm6502 prog.asm --base '$C000' --opcodes my6502.json

Verbose mode:
    $ asm6502 -v prog.asm

Environment variables ASM6502_BASE_ADDRESS, ASM6502_MAX_ERRORS and
ASM6502_WORKERS provide defaults; command-line options take precedence.
"""

from pathlib import Path
from typing import Optional
import logging

import click

from asm6502 import __version__
from asm6502.assembler import Assembler
from asm6502.cli.errors import handle_cli_exception
from asm6502.config import AssemblerConfig, parse_address
from asm6502.cpu import load_opcode_table


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def _build_config(base: Optional[str]) -> AssemblerConfig:
    """Environment defaults with command-line overrides applied."""
    config = AssemblerConfig.from_env()
    if base is not None:
        try:
            config.base_address = parse_address(base)
        except ValueError:
            raise click.BadParameter(f"'{base}' is not a number", param_hint="--base") from None
    try:
        config.validate()
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--base") from None
    return config


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
    help="Output binary file (default: input.bin)",
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
    "--base",
    default=None,
    help="Address of the first instruction (decimal, 0x.. or $..). Default: 0",
)
@click.option(
    "--opcodes",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON opcode table to use instead of the bundled NMOS 6502 table",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="asm6502")
def main(
    input_file: Path,
    output: Optional[Path],
    listing: Optional[Path],
    symbols: Optional[Path],
    base: Optional[str],
    opcodes: Optional[Path],
    verbose: bool,
) -> None:
    """
    Assemble 6502 source code into a raw binary.

    INPUT_FILE is the assembly source file (.asm) to assemble.

    \b
    Examples:
        asm6502 prog.asm                 # Outputs prog.bin
        asm6502 prog.asm -o out.bin      # Specify output file
        asm6502 prog.asm -l prog.lst     # Also write a listing
    """
    _setup_logging(verbose)
    output_file = output if output is not None else input_file.with_suffix(".bin")

    try:
        config = _build_config(base)

        table = None
        if opcodes is not None:
            table = load_opcode_table(opcodes)
            if verbose:
                click.echo(f"Opcode table: {opcodes} ({len(table)} entries)")

        asm = Assembler(opcode_table=table, config=config)

        if verbose:
            click.echo(f"Assembling {input_file}...")

        program = asm.assemble_file(input_file)

        asm.write_binary(output_file)
        if verbose:
            click.echo(f"Wrote {len(program.code)} bytes to {output_file}")

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if verbose:
            click.echo(f"Assembly complete: {len(program.code)} bytes at ${program.origin:04X}")
            click.echo(f"Defined {len(program.symbols)} symbols")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
