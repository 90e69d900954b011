"""
Include Resolver

Turns ``@@file``, ``@file`` and ``START file`` directives into paths.
``@@`` resolves against the directory of the script being read, the other
forms against the process working directory.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from sqlscript.core.classifier import (
    SCRIPT_INCLUDE_PREFIX,
    WORKING_INCLUDE_PREFIXES,
    ends_with,
    starts_with,
)
from sqlscript.core.directories import DirectoryStack, working_directory
from sqlscript.core.options import ScriptOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncludeDirective:
    """An include line split into its directive token and file name."""

    file_name: str
    from_script_directory: bool


def parse_include(line: str, options: ScriptOptions) -> IncludeDirective:
    """Split an include line into the file name and the base it resolves against.

    The directive token and an optional trailing SQL terminator are removed.
    """
    if starts_with(line, SCRIPT_INCLUDE_PREFIX):
        token, from_script_directory = SCRIPT_INCLUDE_PREFIX, True
    else:
        token = next(p for p in WORKING_INCLUDE_PREFIXES if starts_with(line, p))
        from_script_directory = False

    file_name = line[len(token) :].strip()
    terminator = options.sql_terminator
    if ends_with(file_name, terminator):
        file_name = file_name[: -len(terminator)].rstrip()
    return IncludeDirective(file_name, from_script_directory)


class IncludeResolver:
    """Resolves include directives against the shared DirectoryStack."""

    def __init__(self, directories: DirectoryStack, options: ScriptOptions) -> None:
        self.directories = directories
        self.options = options

    def resolve(self, line: str) -> Path | None:
        """Return the path an include line refers to.

        Returns:
            The resolved path, or None when the line names no file
        """
        directive = parse_include(line, self.options)
        if not directive.file_name:
            logger.warning("Include directive without a file name (%s)", line)
            return None

        if directive.from_script_directory:
            base = self.directories.script_directory()
        else:
            base = working_directory()
        return base / directive.file_name
