"""Unified error taxonomy for script interpretation."""

from dataclasses import dataclass


@dataclass(slots=True)
class ScriptError(Exception):
    """Base class for failures that abort a script run."""

    message: str
    code: str = "script_error"

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class ConfigurationError(ScriptError):
    """Raised for unknown SET options and malformed directives."""

    code: str = "configuration_error"


@dataclass(slots=True)
class SourceReadError(ScriptError):
    """Raised when a script source cannot be opened, read or decoded."""

    code: str = "source_read_error"


@dataclass(slots=True)
class ExecutionError(ScriptError):
    """Raised when a statement executor reports a failure."""

    code: str = "execution_error"


@dataclass(slots=True)
class AuthenticationError(ScriptError):
    """Raised when an executor cannot authenticate against its backend."""

    code: str = "authentication_error"
