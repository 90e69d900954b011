"""
Statement Executors

Implementations of the StatementExecutor protocol consumed by the interpreter.
The Databricks executor is imported from its own module so that the SDK is
only loaded when it is used.
"""

from .base import RecordingStatementExecutor, StatementExecutor
from .console import ConsoleStatementExecutor
from .dbapi import DBAPIStatementExecutor

__all__ = [
    "StatementExecutor",
    "RecordingStatementExecutor",
    "ConsoleStatementExecutor",
    "DBAPIStatementExecutor",
]
