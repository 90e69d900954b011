import io
import logging
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from sqlscript.core.interpreter import ScriptInterpreter, ScriptSession
from sqlscript.executors.base import RecordingStatementExecutor


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo logging configuration installed by CLI invocations"""
    package_logger = logging.getLogger("sqlscript")
    handlers, level = list(package_logger.handlers), package_logger.level
    yield
    package_logger.handlers = handlers
    package_logger.setLevel(level)


@pytest.fixture
def recorder() -> RecordingStatementExecutor:
    return RecordingStatementExecutor()


@pytest.fixture
def output() -> Console:
    """Console writing DEFINE listings to an in-memory buffer"""
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def session() -> ScriptSession:
    return ScriptSession()


@pytest.fixture
def interpreter(recorder, session, output) -> ScriptInterpreter:
    return ScriptInterpreter(recorder, session=session, console=output)


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[..., Path]:
    """Write a script below tmp_path and return its path"""

    def _write(relative: str, *lines: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
