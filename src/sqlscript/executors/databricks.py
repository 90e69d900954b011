"""
Databricks Statement Executor

Executes statements against a Databricks SQL warehouse using the
Databricks SQL Statement Execution API, one statement at a time.
"""

import logging
import time
from typing import Any

from databricks.sdk import WorkspaceClient
from databricks.sdk.service.sql import StatementState
from pydantic import BaseModel, Field

from sqlscript.domain.errors import AuthenticationError, ExecutionError

logger = logging.getLogger(__name__)

TERMINAL_STATES = (StatementState.SUCCEEDED, StatementState.FAILED, StatementState.CANCELED)


class DatabricksExecutionConfig(BaseModel):
    """Configuration for statement execution on a SQL warehouse

    Attributes:
        warehouse_id: SQL warehouse ID for execution
        profile: Authentication profile name from ~/.databrickscfg
        timeout_seconds: Timeout for a single statement
        poll_interval_seconds: Delay between two status checks
    """

    warehouse_id: str = Field(..., description="SQL warehouse ID")
    profile: str | None = Field(None, description="Authentication profile name")
    timeout_seconds: int = Field(default=300, description="Statement timeout in seconds")
    poll_interval_seconds: float = Field(default=2.0, description="Polling interval in seconds")


def create_databricks_client(profile: str | None = None) -> WorkspaceClient:
    """Create an authenticated Databricks client

    Args:
        profile: Databricks profile name. If None, the SDK checks environment
                 variables and then the DEFAULT profile.

    Raises:
        AuthenticationError: If the client cannot be created or authenticated
    """
    try:
        client = WorkspaceClient(profile=profile) if profile else WorkspaceClient()
        validate_auth(client)
        return client
    except AuthenticationError:
        raise
    except Exception as e:
        target = f"profile '{profile}'" if profile else "default credentials"
        raise AuthenticationError(f"Failed to authenticate with Databricks ({target}): {e}") from e


def validate_auth(client: WorkspaceClient) -> None:
    """Validate authentication with a cheap API call

    Raises:
        AuthenticationError: If authentication is invalid
    """
    try:
        client.current_user.me()
    except Exception as e:
        raise AuthenticationError(f"Authentication validation failed: {e}") from e


class DatabricksStatementExecutor:
    """Execute statements on a Databricks SQL warehouse

    Each statement is submitted asynchronously and polled until it reaches a
    terminal state. Any non-successful outcome raises ExecutionError, which
    stops the script run.

    Attributes:
        client: Authenticated Databricks WorkspaceClient
        config: Warehouse and timeout settings
    """

    def __init__(self, client: WorkspaceClient, config: DatabricksExecutionConfig) -> None:
        self.client = client
        self.config = config

    def execute_statement(self, sql: str) -> None:
        logger.info(sql)
        try:
            response = self._submit_statement(sql)
        except Exception as e:
            raise ExecutionError(f"API error: {e}\n{sql}") from e

        statement_id = response.statement_id or ""
        terminal = self._poll_until_terminal(statement_id)
        if terminal is None:
            raise ExecutionError(
                f"Statement execution timed out after {self.config.timeout_seconds}s\n{sql}"
            )
        self._handle_terminal_state(terminal, sql)

    def _submit_statement(self, sql: str) -> Any:
        """Submit a statement for async execution via the Databricks API."""
        return self.client.statement_execution.execute_statement(
            warehouse_id=self.config.warehouse_id,
            statement=sql,
            wait_timeout="0s",
        )

    def _poll_until_terminal(self, statement_id: str) -> Any | None:
        """Poll until the statement reaches a terminal state or times out.

        Returns the final status response, or None on timeout.
        """
        start = time.time()
        while (time.time() - start) < self.config.timeout_seconds:
            resp = self.client.statement_execution.get_statement(statement_id)
            if not resp or not resp.status:
                raise ExecutionError("Failed to get statement status")
            if resp.status.state in TERMINAL_STATES:
                return resp
            time.sleep(self.config.poll_interval_seconds)
        return None

    def _handle_terminal_state(self, response: Any, sql: str) -> None:
        state = response.status.state

        if state == StatementState.SUCCEEDED:
            self._log_result_data(response)
            return

        if state == StatementState.FAILED:
            error = response.status.error
            error_msg = error.message if error else "Unknown error"
            raise ExecutionError(f"Statement failed: {error_msg}\n{sql}")

        raise ExecutionError(f"Statement was canceled\n{sql}")

    @staticmethod
    def _log_result_data(response: Any) -> None:
        if not (
            response.result
            and response.result.data_array
            and response.manifest
            and response.manifest.schema
            and response.manifest.schema.columns
        ):
            return
        logger.debug("\t".join(col.name for col in response.manifest.schema.columns))
        for row in response.result.data_array:
            logger.debug("\t".join(str(value) for value in row))
