"""
sqlscript

Preprocessor and runner for SQL*Plus-style scripts: substitution variables,
SET options, nested includes and PL/SQL blocks, executed through pluggable
statement executors.
"""

__version__ = "0.1.0"

from .core import (
    Option,
    ScriptInterpreter,
    ScriptOptions,
    ScriptSession,
    VariableTable,
)
from .domain import (
    ConfigurationError,
    ExecutionError,
    ScriptError,
    SourceReadError,
)
from .executors import (
    DBAPIStatementExecutor,
    RecordingStatementExecutor,
    StatementExecutor,
)

__all__ = [
    "__version__",
    "ScriptInterpreter",
    "ScriptSession",
    "ScriptOptions",
    "Option",
    "VariableTable",
    "StatementExecutor",
    "RecordingStatementExecutor",
    "DBAPIStatementExecutor",
    "ScriptError",
    "ConfigurationError",
    "SourceReadError",
    "ExecutionError",
]
