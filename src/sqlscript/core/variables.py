"""
Substitution variable storage.

Names are case-sensitive exactly as written in the DEFINE directive, even
though the directive keywords themselves are matched case-insensitively.
"""

from collections.abc import Iterator, Sequence


class VariableTable:
    """String-to-string mapping shared by a script and everything it includes."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def set(self, name: str, value: str) -> None:
        self._values[name] = value

    def get(self, name: str) -> str | None:
        return self._values.get(name)

    def items(self) -> Iterator[tuple[str, str]]:
        """Enumerate ``(name, value)`` pairs in definition order."""
        return iter(list(self._values.items()))

    def bind_arguments(self, arguments: Sequence[str]) -> None:
        """Bind positional script arguments to the variables ``1`` to ``n``."""
        for position, argument in enumerate(arguments, 1):
            self._values[str(position)] = argument

    def __len__(self) -> int:
        return len(self._values)
