"""
Run Command

Runs one script, every script of a directory, or standard input through the
interpreter against the selected statement executor.
"""

import sqlite3
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console

from sqlscript.core.interpreter import ScriptInterpreter, ScriptSession
from sqlscript.core.options import Option
from sqlscript.domain.errors import ConfigurationError, ExecutionError
from sqlscript.domain.results import CommandResult
from sqlscript.executors.base import StatementExecutor
from sqlscript.executors.console import ConsoleStatementExecutor
from sqlscript.executors.dbapi import DBAPIStatementExecutor
from sqlscript.util.file_filters import find_scripts

console = Console()

STDIN_TARGET = "-"


class RunError(Exception):
    """Raised when the run command is invoked with an unusable target"""


def parse_assignments(assignments: Sequence[str]) -> list[tuple[str, str]]:
    """Split ``NAME=VALUE`` command line assignments.

    Raises:
        ConfigurationError: If an assignment has no ``=`` or no name
    """
    parsed: list[tuple[str, str]] = []
    for assignment in assignments:
        name, sep, value = assignment.partition("=")
        if not sep or not name.strip():
            raise ConfigurationError(f"Expected NAME=VALUE, got '{assignment}'")
        parsed.append((name.strip(), value))
    return parsed


def build_session(
    overrides: Sequence[str] = (), defines: Sequence[str] = ()
) -> ScriptSession:
    """Create a session pre-seeded with option overrides and variables.

    Args:
        overrides: ``OPTION=VALUE`` pairs, as accepted by the SET directive
        defines: ``NAME=VALUE`` substitution variables

    Raises:
        ConfigurationError: If an option name or assignment is invalid
    """
    session = ScriptSession()
    for name, value in parse_assignments(overrides):
        session.options.apply(Option.from_name(name), value or None)
    for name, value in parse_assignments(defines):
        session.variables.set(name, value)
    return session


def resolve_targets(target: str) -> list[Path]:
    """Expand a run target into the script files to execute.

    Raises:
        RunError: If the target does not exist or a directory holds no scripts
    """
    path = Path(target)
    if path.is_dir():
        scripts = find_scripts(path)
        if not scripts:
            raise RunError(f"No .sql scripts found in {path}")
        return scripts
    if not path.is_file():
        raise RunError(f"Script not found: {path}")
    return [path]


@contextmanager
def open_executor(
    *,
    database: str = ":memory:",
    warehouse_id: str | None = None,
    profile: str | None = None,
    timeout_seconds: int = 300,
    dry_run: bool = False,
    output: Console | None = None,
) -> Iterator[StatementExecutor]:
    """Yield the executor selected by the command line options.

    ``dry_run`` wins over ``warehouse_id``, which wins over ``database``.
    Connections opened here are closed when the block exits.
    """
    if dry_run:
        yield ConsoleStatementExecutor(output or console)
        return

    if warehouse_id:
        from sqlscript.executors.databricks import (
            DatabricksExecutionConfig,
            DatabricksStatementExecutor,
            create_databricks_client,
        )

        config = DatabricksExecutionConfig(
            warehouse_id=warehouse_id, profile=profile, timeout_seconds=timeout_seconds
        )
        client = create_databricks_client(config.profile)
        yield DatabricksStatementExecutor(client, config)
        return

    try:
        connection = sqlite3.connect(database, isolation_level=None)
    except sqlite3.Error as e:
        raise ExecutionError(f"Unable to open database {database}: {e}") from e
    try:
        yield DBAPIStatementExecutor.for_connection(connection)
    finally:
        connection.close()


def run_script(
    target: str,
    arguments: Sequence[str],
    executor: StatementExecutor,
    *,
    session: ScriptSession | None = None,
    encoding: str = "utf-8",
    output: Console | None = None,
) -> CommandResult:
    """Run a script target through the interpreter.

    Every script of a directory target is a separate top-level run sharing
    one session, so options and variables carry over from file to file.

    Args:
        target: Script path, directory, or ``-`` for standard input
        arguments: Positional arguments bound to ``&1`` .. ``&n``
        executor: Receives every completed statement
        session: Pre-seeded session; a fresh one when omitted
        encoding: Encoding of the script files
        output: Console receiving DEFINE listings

    Returns:
        CommandResult with the scripts run and the number of statements executed

    Raises:
        RunError: If the target cannot be resolved
        ScriptError: If the run fails
    """
    interpreter = ScriptInterpreter(
        executor, session=session, console=output or console, encoding=encoding
    )

    scripts: list[str] = []
    if target == STDIN_TARGET:
        interpreter.execute_stream(sys.stdin.buffer, arguments)
        scripts.append(STDIN_TARGET)
    else:
        for path in resolve_targets(target):
            interpreter.execute_file(path, arguments)
            scripts.append(str(path))

    count = interpreter.statements_executed
    return CommandResult(
        success=True,
        message=f"{count} statement(s) executed",
        data={"scripts": scripts, "statements_executed": count},
    )
