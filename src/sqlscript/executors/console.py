"""
Console Executor

Dry-run executor that prints each statement instead of running it.
"""

from rich.console import Console
from rich.syntax import Syntax

from sqlscript.executors.base import RecordingStatementExecutor


class ConsoleStatementExecutor(RecordingStatementExecutor):
    """Print statements with SQL syntax highlighting"""

    def __init__(self, console: Console | None = None) -> None:
        super().__init__()
        self.console = console or Console()

    def execute_statement(self, sql: str) -> None:
        super().execute_statement(sql)
        self.console.print(f"[dim]-- Statement {len(self.statements)}[/dim]")
        self.console.print(Syntax(sql, "sql", theme="monokai", line_numbers=False))
