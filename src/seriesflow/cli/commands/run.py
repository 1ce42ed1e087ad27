"""
Run command for executing work trees
"""

import asyncio
import importlib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Coroutine, Optional

import typer
from rich.console import Console
from rich.table import Table

from seriesflow.cli.rendering import build_tree
from seriesflow.core.execution import Diagnostics, SeriesRunner, WorkTreeError
from seriesflow.core.report import ResultSnapshot
from seriesflow.core.results import Aggregate
from seriesflow.core.utils.formatting import format_result
from seriesflow.core.utils.logger import get_logger

logger = get_logger(__name__)

app = typer.Typer(name="run", help="Run a work tree")
console = Console()

OUTPUT_FORMATS = ("tree", "text", "json")

# Exit codes
EXIT_FAILURE = 1
EXIT_INVALID = 2


def run_async_safe(coro: Coroutine) -> Any:
    """
    Safely run async coroutine, handling both cases:
    - No event loop running: use asyncio.run()
    - Event loop already running: run in a fresh loop on a worker thread

    This is needed for CLI commands that may be called from test environments
    where an event loop is already running.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        # No event loop running, safe to use asyncio.run()
        return asyncio.run(coro)

    import concurrent.futures

    def run_in_thread():
        new_loop = asyncio.new_event_loop()
        asyncio.set_event_loop(new_loop)
        try:
            return new_loop.run_until_complete(coro)
        finally:
            new_loop.close()

    with concurrent.futures.ThreadPoolExecutor() as executor:
        future = executor.submit(run_in_thread)
        return future.result()


def load_work_tree(target: str) -> Any:
    """
    Load a work tree from a ``package.module:attribute`` reference

    If the attribute is a callable that is not itself a mapping, it is called
    without arguments and its return value is used as the work tree.

    Raises:
        ValueError: If the reference is malformed or cannot be resolved
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Target must look like 'package.module:attribute', got {target!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import module {module_name!r}: {e}") from e

    value: Any = module
    for part in attribute.split("."):
        if not hasattr(value, part):
            raise ValueError(f"Module {module_name!r} has no attribute {attribute!r}")
        value = getattr(value, part)

    if callable(value) and not isinstance(value, Mapping):
        value = value()
    return value


def print_report(report: Aggregate, output_format: str) -> None:
    """Print a report in one of OUTPUT_FORMATS"""
    if output_format == "json":
        typer.echo(ResultSnapshot.from_result(report).model_dump_json(indent=2))
    elif output_format == "text":
        typer.echo(format_result(report))
    else:
        console.print(build_tree(report))


def print_summary(report: Aggregate, diagnostics: Diagnostics) -> None:
    """Print outcome counts as a table"""
    counts = report.count()
    table = Table(title="Run Summary")
    table.add_column("Succeeded", style="green")
    table.add_column("Failed", style="red")
    table.add_column("Invalid", style="magenta")
    table.add_column("Unknown", style="dim")
    table.add_column("Errors", style="yellow")
    table.add_row(
        str(counts["success"]),
        str(counts["failure"]),
        str(counts["invalid"]),
        str(counts["unknown"]),
        str(diagnostics.errors),
    )
    console.print(table)


@app.command()
def tree(
    target: str = typer.Argument(..., help="Work tree reference, e.g. 'mypkg.checks:series'"),
    output_format: str = typer.Option("tree", "--format", "-f", help="Output format: tree, text or json"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the JSON report to this file"),
    summary: bool = typer.Option(True, "--summary/--no-summary", help="Print outcome counts"),
):
    """
    Run every unit of a work tree once and print the report

    Exit codes: 0 when the root report succeeded (or is empty), 1 when any
    unit failed, 2 when the work tree cannot be loaded or is malformed.
    """
    if output_format not in OUTPUT_FORMATS:
        typer.echo(f"Error: --format must be one of {', '.join(OUTPUT_FORMATS)}", err=True)
        raise typer.Exit(EXIT_INVALID)

    try:
        work_tree = load_work_tree(target)
    except ValueError as e:
        typer.echo(f"Error: {str(e)}", err=True)
        raise typer.Exit(EXIT_INVALID)

    diagnostics = Diagnostics()
    runner = SeriesRunner(diagnostics=diagnostics)

    try:
        report = run_async_safe(runner.execute(work_tree))
    except WorkTreeError as e:
        typer.echo(f"Error: {str(e)}", err=True)
        raise typer.Exit(EXIT_INVALID)

    print_report(report, output_format)
    if summary and output_format != "json":
        print_summary(report, diagnostics)

    if output:
        with open(output, "w") as f:
            f.write(ResultSnapshot.from_result(report).model_dump_json(indent=2))
        typer.echo(f"Result saved to: {output}")

    if report.failed:
        raise typer.Exit(EXIT_FAILURE)
