"""
CLI commands for seriesflow
"""

from seriesflow.cli.commands.run import app as run_app
from seriesflow.cli.commands.selftest import app as selftest_app

__all__ = [
    "run",
    "selftest",
]

# Expose apps for main.py
run = type("run", (), {"app": run_app})()
selftest = type("selftest", (), {"app": selftest_app})()
