"""Outcome of a script run as reported by the ``run`` command."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class CommandResult:
    """Outcome of one ``sqlscript run`` invocation.

    ``data`` holds the scripts that were run and the number of statements
    forwarded to the executor.
    """

    success: bool
    code: str = "ok"
    message: str = ""
    data: dict[str, Any] = field(default_factory=dict)

    def as_json_dict(self) -> dict[str, Any]:
        """Envelope printed by ``run --json``; failures use the same keys."""
        return {
            "success": self.success,
            "code": self.code,
            "message": self.message,
            "data": self.data,
        }
