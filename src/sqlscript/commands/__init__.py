"""
sqlscript CLI Commands

Command implementations for the CLI. The CLI layer (cli.py) acts as a thin
routing layer over these functions.
"""

from .run import RunError, build_session, open_executor, run_script

__all__ = [
    "run_script",
    "build_session",
    "open_executor",
    "RunError",
]
