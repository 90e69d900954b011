"""
Base Statement Executor Protocol

Defines the contract the interpreter uses to run completed statements.
Statements arrive fully substituted and without their terminator; the
executor treats them as opaque text.
"""

from typing import Protocol


class StatementExecutor(Protocol):
    """Protocol for running one SQL statement

    Executors handle connections, submission and result handling. Any failure
    is fatal to the script run.
    """

    def execute_statement(self, sql: str) -> None:
        """Execute a single statement

        Args:
            sql: Statement text, already substituted

        Raises:
            ExecutionError: If the statement fails
        """
        ...


class RecordingStatementExecutor:
    """Keeps every statement it receives, in order, without running it."""

    def __init__(self) -> None:
        self.statements: list[str] = []

    def execute_statement(self, sql: str) -> None:
        self.statements.append(sql)
