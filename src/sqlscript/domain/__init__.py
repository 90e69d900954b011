"""Domain types shared by the interpreter, executors and CLI."""

from .errors import (
    AuthenticationError,
    ConfigurationError,
    ExecutionError,
    ScriptError,
    SourceReadError,
)
from .results import CommandResult

__all__ = [
    "CommandResult",
    "ScriptError",
    "ConfigurationError",
    "SourceReadError",
    "ExecutionError",
    "AuthenticationError",
]
