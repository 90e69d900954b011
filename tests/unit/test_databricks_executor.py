"""Unit tests for Databricks auth and statement executor behaviors."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest
from databricks.sdk.service.sql import StatementState

from sqlscript.domain.errors import AuthenticationError, ExecutionError
from sqlscript.executors.databricks import (
    DatabricksExecutionConfig,
    DatabricksStatementExecutor,
    create_databricks_client,
    validate_auth,
)


def _mk_resp(
    *,
    state: StatementState,
    statement_id: str = "stmt_1",
    data_array: list[list] | None = None,
    columns: list[str] | None = None,
    error_message: str | None = None,
) -> SimpleNamespace:
    status = SimpleNamespace(state=state, error=None)
    if error_message is not None:
        status.error = SimpleNamespace(message=error_message)
    result = None if data_array is None else SimpleNamespace(data_array=data_array)
    manifest = None
    if columns is not None:
        manifest = SimpleNamespace(
            schema=SimpleNamespace(columns=[SimpleNamespace(name=name) for name in columns])
        )
    return SimpleNamespace(
        statement_id=statement_id,
        status=status,
        result=result,
        manifest=manifest,
    )


@pytest.fixture
def mock_client() -> SimpleNamespace:
    return SimpleNamespace(statement_execution=Mock(), current_user=Mock(), config=Mock())


@pytest.fixture
def executor(mock_client: SimpleNamespace) -> DatabricksStatementExecutor:
    config = DatabricksExecutionConfig(
        warehouse_id="wh_1", timeout_seconds=2, poll_interval_seconds=0
    )
    return DatabricksStatementExecutor(client=mock_client, config=config)


def test_validate_auth_success(mock_client: SimpleNamespace) -> None:
    mock_client.current_user.me.return_value = SimpleNamespace(user_name="a@b.com")
    validate_auth(mock_client)
    mock_client.current_user.me.assert_called_once()


def test_validate_auth_failure_raises(mock_client: SimpleNamespace) -> None:
    mock_client.current_user.me.side_effect = RuntimeError("auth")
    with pytest.raises(AuthenticationError, match="Authentication validation failed"):
        validate_auth(mock_client)


def test_create_databricks_client_with_profile() -> None:
    with patch("sqlscript.executors.databricks.WorkspaceClient") as client_cls:
        client = create_databricks_client("DEV")

    client_cls.assert_called_once_with(profile="DEV")
    client.current_user.me.assert_called_once()


def test_create_databricks_client_wraps_sdk_errors() -> None:
    with patch(
        "sqlscript.executors.databricks.WorkspaceClient", side_effect=ValueError("no host")
    ):
        with pytest.raises(AuthenticationError, match="profile 'DEV'") as exc_info:
            create_databricks_client("DEV")
    assert exc_info.value.code == "authentication_error"


def test_execute_statement_success(executor, mock_client) -> None:
    mock_client.statement_execution.execute_statement.return_value = SimpleNamespace(
        statement_id="stmt_1"
    )
    mock_client.statement_execution.get_statement.side_effect = [
        _mk_resp(state=StatementState.RUNNING),
        _mk_resp(state=StatementState.SUCCEEDED, data_array=[["1"]], columns=["one"]),
    ]

    executor.execute_statement("SELECT 1")

    mock_client.statement_execution.execute_statement.assert_called_once_with(
        warehouse_id="wh_1", statement="SELECT 1", wait_timeout="0s"
    )
    assert mock_client.statement_execution.get_statement.call_count == 2


def test_execute_statement_failed_state(executor, mock_client) -> None:
    mock_client.statement_execution.execute_statement.return_value = SimpleNamespace(
        statement_id="stmt_1"
    )
    mock_client.statement_execution.get_statement.return_value = _mk_resp(
        state=StatementState.FAILED, error_message="TABLE_NOT_FOUND"
    )

    with pytest.raises(ExecutionError, match="TABLE_NOT_FOUND"):
        executor.execute_statement("SELECT * FROM missing")


def test_execute_statement_canceled(executor, mock_client) -> None:
    mock_client.statement_execution.execute_statement.return_value = SimpleNamespace(
        statement_id="stmt_1"
    )
    mock_client.statement_execution.get_statement.return_value = _mk_resp(
        state=StatementState.CANCELED
    )

    with pytest.raises(ExecutionError, match="canceled"):
        executor.execute_statement("SELECT 1")


def test_execute_statement_submit_error(executor, mock_client) -> None:
    mock_client.statement_execution.execute_statement.side_effect = RuntimeError("503")

    with pytest.raises(ExecutionError, match="API error: 503"):
        executor.execute_statement("SELECT 1")


def test_execute_statement_missing_status(executor, mock_client) -> None:
    mock_client.statement_execution.execute_statement.return_value = SimpleNamespace(
        statement_id="stmt_1"
    )
    mock_client.statement_execution.get_statement.return_value = SimpleNamespace(status=None)

    with pytest.raises(ExecutionError, match="Failed to get statement status"):
        executor.execute_statement("SELECT 1")


def test_execute_statement_timeout(mock_client) -> None:
    config = DatabricksExecutionConfig(warehouse_id="wh_1", timeout_seconds=0)
    executor = DatabricksStatementExecutor(client=mock_client, config=config)
    mock_client.statement_execution.execute_statement.return_value = SimpleNamespace(
        statement_id="stmt_1"
    )

    with pytest.raises(ExecutionError, match="timed out after 0s"):
        executor.execute_statement("SELECT 1")
    mock_client.statement_execution.get_statement.assert_not_called()
