"""File selection helpers for running every script in a directory."""

from collections.abc import Callable
from pathlib import Path


def having_extension(expected_extension: str) -> Callable[[Path], bool]:
    """Return a predicate matching files by extension, ignoring case.

    The extension is everything after the first dot of the file name, so
    ``data.backup.sql`` has the extension ``backup.sql``.
    """

    def accept(path: Path) -> bool:
        name = path.name
        extension = name[name.find(".") + 1 :]
        return extension.lower() == expected_extension.lower()

    return accept


def find_scripts(directory: Path, extension: str = "sql") -> list[Path]:
    """List the files of ``directory`` with the given extension, sorted by name."""
    accept = having_extension(extension)
    return sorted(path for path in directory.iterdir() if path.is_file() and accept(path))
