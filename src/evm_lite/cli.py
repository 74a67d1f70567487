"""CLI entry point for evm-lite."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .bytecode.opcodes import STATIC_GAS
from .bytecode.parser import decode_hex, disassemble
from .engine.alu import to_signed
from .engine.config import DEFAULT_GAS_LIMIT, InterpreterConfig, UnknownOpcodePolicy
from .engine.interpreter import Interpreter
from .report.formatter import ResultFormatter, format_word

console = Console()

EXIT_BAD_INPUT = 1
EXIT_FAULTED = 2


def _configure_logging(verbose: int) -> None:
    if not verbose:
        return
    level = logging.DEBUG if verbose > 1 else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_code(code: str | None, file: str | None, binary: bool) -> tuple[bytes, str]:
    if code is not None and file is not None:
        raise click.UsageError("Pass bytecode either as an argument or with --file, not both.")
    if code is None and file is None:
        raise click.UsageError("No bytecode given.")
    if file is not None and binary:
        return Path(file).read_bytes(), Path(file).name
    label = Path(file).name if file is not None else "argument"
    try:
        text = Path(file).read_text(encoding="utf-8") if file is not None else code
        return decode_hex(text), label
    except ValueError as exc:
        console.print(f"[red]Failed to decode bytecode: {exc}[/]")
        sys.exit(EXIT_BAD_INPUT)


def _emit(report: str, output: str | None) -> None:
    if output:
        Path(output).write_text(report)
        console.print(f"[green]Report saved to {output}[/]")
    else:
        click.echo(report)


_code_argument = click.argument("code", required=False)
_file_option = click.option("--file", "-f", type=click.Path(exists=True, dir_okay=False), help="Read bytecode from a file")
_binary_option = click.option("--binary", is_flag=True, help="Treat --file as raw bytes instead of hex text")


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", count=True, help="Log execution (-v for halts, -vv for every step)")
def main(verbose: int) -> None:
    """Interpreter for a 256-bit EVM stack machine subset."""
    _configure_logging(verbose)


@main.command()
@_code_argument
@_file_option
@_binary_option
@click.option("--format", "fmt", type=click.Choice(["table", "json", "markdown"]), default="table")
@click.option("--output", "-o", type=click.Path(), help="Write the report to this file (requires --format json or markdown)")
@click.option("--strict", is_flag=True, help="Fault on unknown opcodes instead of skipping them")
@click.option("--gas-limit", type=click.IntRange(min=0), default=DEFAULT_GAS_LIMIT, show_default=True)
@click.option(
    "--fees",
    type=click.Choice(["none", "static"]),
    default="none",
    help="Fee schedule debited per instruction",
)
@click.option("--max-steps", type=click.IntRange(min=1), default=None, help="Stop after this many instructions")
def run(
    code: str | None,
    file: str | None,
    binary: bool,
    fmt: str,
    output: str | None,
    strict: bool,
    gas_limit: int,
    fees: str,
    max_steps: int | None,
) -> None:
    """Execute bytecode and print the final stack."""
    if output and fmt == "table":
        raise click.UsageError("--output requires --format json or markdown.")
    data, label = _load_code(code, file, binary)
    config = InterpreterConfig(
        unknown_opcode=UnknownOpcodePolicy.FAULT if strict else UnknownOpcodePolicy.IGNORE,
        gas_limit=gas_limit,
        fee_schedule=STATIC_GAS if fees == "static" else {},
        max_steps=max_steps,
    )
    result = Interpreter(config).run(data)
    formatter = ResultFormatter(label)

    if fmt == "json":
        _emit(formatter.to_json(result), output)
    elif fmt == "markdown":
        _emit(formatter.to_markdown(result), output)
    else:
        table = Table(title=f"Stack ({len(result.stack)} items, top first)")
        table.add_column("Depth", justify="right")
        table.add_column("Hex")
        table.add_column("Signed", justify="right")
        for depth, word in enumerate(result.stack):
            table.add_row(str(depth), format_word(word), str(to_signed(word)))
        console.print(table)
        status = "[green]success[/]" if result.success else "[red]failed[/]"
        console.print(
            f"Halted: {result.halt_reason.value} ({status}) after {result.steps} steps, gas used {result.gas_used}"
        )

    if not result.success:
        console.print(f"[red]Execution fault: {result.error}[/]")
        sys.exit(EXIT_FAULTED)


@main.command()
@_code_argument
@_file_option
@_binary_option
@click.option("--format", "fmt", type=click.Choice(["table", "markdown"]), default="table")
def disasm(code: str | None, file: str | None, binary: bool, fmt: str) -> None:
    """List the instructions in bytecode."""
    data, label = _load_code(code, file, binary)
    instructions = disassemble(data)

    if fmt == "markdown":
        _emit(ResultFormatter(label).disassembly_markdown(instructions), None)
        return

    table = Table(title=f"{label}: {len(data)} bytes, {len(instructions)} instructions")
    table.add_column("Offset")
    table.add_column("Instruction")
    table.add_column("Immediate")
    for ins in instructions:
        style = "yellow" if ins.name.startswith("UNKNOWN") else None
        immediate = f"0x{ins.operand.hex()}" if ins.operand else ""
        if ins.truncated:
            immediate += " (truncated)"
        table.add_row(f"0x{ins.offset:04X}", ins.name, immediate, style=style)
    console.print(table)


if __name__ == "__main__":
    main()
