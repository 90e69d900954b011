"""
Line Classifier

Maps a trimmed script line to the action the interpreter takes for it. The
predicates are evaluated in a fixed order and the first match wins, so a
line inside a procedural block is never mistaken for a directive.
"""

import re
from enum import Enum

from sqlscript.core.options import ScriptOptions

COMMENT_PREFIXES = ("--", "#", "//")
BLOCK_PREFIXES = ("BEGIN", "DECLARE")
SCRIPT_INCLUDE_PREFIX = "@@"
WORKING_INCLUDE_PREFIXES = ("START", "@")
LITERAL_BLOCK_END = "/"
LITERAL_SQL_END = "/"

_BLOCK_START = re.compile(
    r"(^|\s)CREATE\s+(OR\s+REPLACE\s+)?"
    r"(FUNCTION|LIBRARY|PACKAGE(\s+BODY)?|PROCEDURE|TRIGGER|TYPE)(\s|$)",
    re.IGNORECASE,
)


class ParserState(Enum):
    IDLE = "idle"
    ACCUMULATING_SQL = "accumulating_sql"
    ACCUMULATING_BLOCK = "accumulating_block"


class LineCategory(Enum):
    EMPTY = "empty"
    COMMENT = "comment"
    BLOCK_END = "block_end"
    BLOCK_START = "block_start"
    INCLUDE = "include"
    EXIT = "exit"
    SET = "set"
    DEFINE = "define"
    SQL_END = "sql_end"
    CONTINUATION = "continuation"


def starts_with(line: str, *prefixes: str) -> bool:
    """Case-insensitive prefix test against any of ``prefixes``."""
    lowered = line.lower()
    return any(lowered.startswith(prefix.lower()) for prefix in prefixes)


def ends_with(line: str, *suffixes: str) -> bool:
    """Case-insensitive suffix test against any of ``suffixes``."""
    lowered = line.lower()
    return any(lowered.endswith(suffix.lower()) for suffix in suffixes)


def is_comment(line: str) -> bool:
    return starts_with(line, *COMMENT_PREFIXES)


def is_block_end(line: str, options: ScriptOptions) -> bool:
    return line in (LITERAL_BLOCK_END, options.block_terminator)


def is_block_start(line: str) -> bool:
    return bool(_BLOCK_START.search(line)) or starts_with(line, *BLOCK_PREFIXES)


def is_include(line: str) -> bool:
    return starts_with(line, SCRIPT_INCLUDE_PREFIX, *WORKING_INCLUDE_PREFIXES)


def sql_terminator_of(line: str, options: ScriptOptions) -> str | None:
    """Return the statement terminator ending ``line``, if any."""
    for terminator in (options.sql_terminator, LITERAL_SQL_END):
        if ends_with(line, terminator):
            return terminator
    return None


def classify_line(line: str, state: ParserState, options: ScriptOptions) -> LineCategory:
    """Classify a trimmed line given the current parser state.

    Args:
        line: Script line with surrounding whitespace removed
        state: State of the statement buffer before this line
        options: Current delimiter configuration

    Returns:
        The first matching category; CONTINUATION when nothing else applies
    """
    idle = state is ParserState.IDLE
    in_block = state is ParserState.ACCUMULATING_BLOCK

    if not in_block and not line:
        return LineCategory.EMPTY
    if is_comment(line):
        return LineCategory.COMMENT
    if in_block and is_block_end(line, options):
        return LineCategory.BLOCK_END
    if idle and is_block_start(line):
        return LineCategory.BLOCK_START
    if idle and is_include(line):
        return LineCategory.INCLUDE
    if idle and ends_with(line, "EXIT"):
        return LineCategory.EXIT
    if idle and starts_with(line, "SET"):
        return LineCategory.SET
    if not in_block and starts_with(line, "DEFINE"):
        return LineCategory.DEFINE
    if not in_block and sql_terminator_of(line, options) is not None:
        return LineCategory.SQL_END
    return LineCategory.CONTINUATION
