"""
CLI main entry point for seriesflow
"""

import sys
import typer
from pathlib import Path
from dotenv import load_dotenv
from seriesflow.cli.commands import run, selftest

def _load_env_file():
    """
    Load .env file from appropriate location
    """
    possible_paths = [Path.cwd() / ".env"]
    if sys.argv and len(sys.argv) > 0:
        try:
            main_script = Path(sys.argv[0]).resolve()
            if main_script.is_file():
                possible_paths.append(main_script.parent / ".env")
        except OSError:
            pass

    for env_path in possible_paths:
        if env_path.exists():
            load_dotenv(env_path, override=False)
            return


# Create Typer app
app = typer.Typer(
    name="seriesflow",
    help="Sequential test/task tree runner CLI",
    add_completion=False,
)

@app.callback(invoke_without_command=True)
def cli_callback(ctx: typer.Context):
    _load_env_file()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())

app.add_typer(run.app, name="run", help="Run a work tree")
app.add_typer(selftest.app, name="selftest", help="Check the runner against its sample tree")

@app.command()
def version():
    """Show version information."""
    from seriesflow import __version__
    typer.echo(f"seriesflow version {__version__}")

if __name__ == "__main__":
    app()
