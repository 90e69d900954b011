"""
Script directory stack.

The directory of the script being read sits on top of the stack so that
``@@`` includes resolve relative to it.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


def working_directory() -> Path:
    """Return the process working directory."""
    return Path.cwd()


class DirectoryStack:
    """Ordered stack of script directories"""

    def __init__(self) -> None:
        self._directories: list[Path] = []

    def push(self, directory: Path) -> None:
        self._directories.append(directory)

    def pop(self) -> Path:
        return self._directories.pop()

    def peek(self) -> Path | None:
        return self._directories[-1] if self._directories else None

    @contextmanager
    def entered(self, directory: Path) -> Iterator[Path]:
        """Keep ``directory`` on top of the stack for the duration of the block.

        The directory is popped on every exit path, including exceptions raised
        by the script being executed.
        """
        self.push(directory)
        try:
            yield directory
        finally:
            self.pop()

    def script_directory(self) -> Path:
        """Return the current script directory, or the working directory if none."""
        directory = self.peek()
        if directory is None:
            directory = working_directory()
            logger.warning("Working directory %s used as script directory", directory)
        return directory

    def __len__(self) -> int:
        return len(self._directories)
