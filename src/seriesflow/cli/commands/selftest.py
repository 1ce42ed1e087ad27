"""
Selftest command: run the engine against its own sample tree
"""

import typer

from seriesflow.cli.commands.run import console, run_async_safe
from seriesflow.cli.rendering import build_tree
from seriesflow.core.execution import run_series
from seriesflow.selftest import build_selftest_tree

app = typer.Typer(name="selftest", help="Check the runner against its sample tree")


@app.command()
def check():
    """Run the built-in self-checks; exits 1 if any of them fails"""
    report = run_async_safe(run_series(build_selftest_tree()))
    console.print(build_tree(report))
    if report.failed:
        typer.echo("Self-test failed", err=True)
        raise typer.Exit(1)
    typer.echo("Self-test successful")
