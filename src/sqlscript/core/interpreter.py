"""
Script Interpreter

Reads a script line by line, accumulates SQL statements and procedural
blocks, applies the SET/DEFINE/include/EXIT directives and forwards every
completed statement to a StatementExecutor after variable substitution.

Example:
    >>> executor = RecordingStatementExecutor()
    >>> ScriptInterpreter(executor).execute_text("SELECT * FROM t;")
    >>> executor.statements
    ['SELECT * FROM t']
"""

import io
import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, TextIO

from rich.console import Console

from sqlscript.core.classifier import (
    LineCategory,
    ParserState,
    classify_line,
    sql_terminator_of,
)
from sqlscript.core.directives import parse_define, parse_set
from sqlscript.core.directories import DirectoryStack
from sqlscript.core.includes import IncludeResolver
from sqlscript.core.options import ScriptOptions
from sqlscript.core.substitution import SubstitutionEngine
from sqlscript.core.variables import VariableTable
from sqlscript.domain.errors import ExecutionError, ScriptError, SourceReadError
from sqlscript.executors.base import StatementExecutor

logger = logging.getLogger(__name__)


class ScriptExit(Exception):
    """Unwinds every nested script when an EXIT directive is read."""


@dataclass
class ScriptSession:
    """State shared by a top-level script and every script it includes."""

    options: ScriptOptions = field(default_factory=ScriptOptions)
    variables: VariableTable = field(default_factory=VariableTable)
    directories: DirectoryStack = field(default_factory=DirectoryStack)


class StatementBuffer:
    """Text of the statement being accumulated and the state that produced it."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self.state = ParserState.IDLE

    def append(self, text: str) -> None:
        self._parts.append(text)

    def text(self) -> str:
        return "".join(self._parts)

    def is_empty(self) -> bool:
        return not self.text()

    def flush(self) -> str:
        """Return the accumulated text and reset the buffer to IDLE."""
        text = self.text()
        self._parts = []
        self.state = ParserState.IDLE
        return text


class ScriptInterpreter:
    """Drive one script run against a StatementExecutor

    Attributes:
        executor: Receives every completed, substituted statement
        session: Options, variables and directory stack shared across includes
        console: User-visible channel for DEFINE listings
        encoding: Encoding used to decode script files and byte streams
        statements_executed: Number of statements forwarded so far
    """

    def __init__(
        self,
        executor: StatementExecutor,
        session: ScriptSession | None = None,
        console: Console | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self.executor = executor
        self.session = session or ScriptSession()
        self.console = console or Console()
        self.encoding = encoding
        self.statements_executed = 0
        self.substitution = SubstitutionEngine(self.session.options, self.session.variables)
        self.includes = IncludeResolver(self.session.directories, self.session.options)

    def execute_file(self, path: Path | str, arguments: Sequence[str] = ()) -> None:
        """Execute a script file; its directory becomes the script directory.

        Raises:
            SourceReadError: If the file cannot be read or decoded
            ExecutionError: If the executor rejects a statement
            ConfigurationError: If a SET or DEFINE directive is invalid
        """
        try:
            self._execute_file(Path(path), arguments)
        except ScriptExit:
            logger.debug("EXIT stopped %s", path)

    def execute_stream(self, stream: BinaryIO, arguments: Sequence[str] = ()) -> None:
        """Execute a script read from a byte stream."""
        reader = io.TextIOWrapper(stream, encoding=self.encoding)
        try:
            self.execute_reader(reader, arguments)
        finally:
            reader.detach()

    def execute_reader(self, reader: TextIO, arguments: Sequence[str] = ()) -> None:
        """Execute a script read from a text stream."""
        try:
            self._execute_reader(reader, arguments)
        except ScriptExit:
            logger.debug("EXIT stopped script")

    def execute_text(self, text: str, arguments: Sequence[str] = ()) -> None:
        self.execute_reader(io.StringIO(text), arguments)

    def _execute_file(self, path: Path, arguments: Sequence[str]) -> None:
        with self.session.directories.entered(path.parent):
            if not path.exists():
                logger.warning("Unable to run the %s script because it does not exist", path)
                return
            try:
                reader = open(path, encoding=self.encoding)
            except OSError as e:
                raise SourceReadError(f"Unable to open script {path}: {e}") from e
            with reader:
                self._execute_reader(reader, arguments)

    def _execute_reader(self, reader: TextIO, arguments: Sequence[str]) -> None:
        self.session.variables.bind_arguments(arguments)

        buffer = StatementBuffer()
        for line in self._read_lines(reader):
            category = classify_line(line, buffer.state, self.session.options)
            logger.debug("%s [%s] %s", category.name, buffer.state.name, line)
            self._handle(line, category, buffer)

        if not buffer.is_empty():
            logger.warning("Unexecuted artifacts (%s)", buffer.text())

    def _read_lines(self, reader: TextIO) -> Iterator[str]:
        while True:
            try:
                line = reader.readline()
            except (OSError, UnicodeDecodeError) as e:
                raise SourceReadError(f"Unable to read script: {e}") from e
            if not line:
                return
            yield line.strip()

    def _handle(self, line: str, category: LineCategory, buffer: StatementBuffer) -> None:
        options = self.session.options

        if category in (LineCategory.EMPTY, LineCategory.COMMENT):
            return

        if category is LineCategory.BLOCK_END:
            self._dispatch(buffer.flush())

        elif category is LineCategory.BLOCK_START:
            buffer.append(f"{line}\n")
            buffer.state = ParserState.ACCUMULATING_BLOCK

        elif category is LineCategory.INCLUDE:
            path = self.includes.resolve(line)
            if path is not None:
                self._execute_file(path, ())

        elif category is LineCategory.EXIT:
            raise ScriptExit()

        elif category is LineCategory.SET:
            directive = parse_set(line)
            options.apply(directive.option, directive.value)

        elif category is LineCategory.DEFINE:
            self._define(line)

        elif category is LineCategory.SQL_END:
            terminator = sql_terminator_of(line, options) or ""
            buffer.append(line[: len(line) - len(terminator)])
            self._dispatch(buffer.flush())

        else:
            buffer.append(f"{line}\n")
            if buffer.state is ParserState.IDLE:
                buffer.state = ParserState.ACCUMULATING_SQL

    def _define(self, line: str) -> None:
        directive = parse_define(line)
        variables = self.session.variables
        if directive.name is None:
            for name, _ in variables.items():
                self._print_variable(name)
        elif directive.value is None:
            self._print_variable(directive.name)
        else:
            variables.set(directive.name, self.substitution.substitute(directive.value))

    def _print_variable(self, name: str) -> None:
        value = self.session.variables.get(name)
        if value is None:
            logger.warning("The substitution variable %s is not defined.", name)
            value = ""
        self.console.print(
            f'DEFINE {name} = "{value}"', markup=False, highlight=False, soft_wrap=True
        )

    def _dispatch(self, text: str) -> None:
        statement = text.strip()
        if not statement:
            logger.debug("Skipping empty statement")
            return

        sql = self.substitution.substitute(statement)
        try:
            self.executor.execute_statement(sql)
        except ScriptError:
            raise
        except Exception as e:
            raise ExecutionError(f"Statement failed: {e}\n{sql}") from e
        self.statements_executed += 1
