"""
DB-API Statement Executor

Runs statements on any PEP 249 connection (sqlite3, psycopg, oracledb, ...).
Result sets are only logged; the executor does not interpret them.
"""

import logging
from typing import Any

from sqlscript.domain.errors import ExecutionError

logger = logging.getLogger(__name__)


class DBAPIStatementExecutor:
    """Execute statements through a DB-API 2.0 connection

    The connection is owned by the caller, which decides on commit and close.

    Attributes:
        connection: Open DB-API connection
    """

    def __init__(self, connection: Any) -> None:
        self.connection = connection

    @classmethod
    def for_connection(cls, connection: Any) -> "DBAPIStatementExecutor":
        return cls(connection)

    def execute_statement(self, sql: str) -> None:
        """Execute one statement and log any rows it returns

        Raises:
            ExecutionError: If the driver rejects the statement
        """
        cursor = None
        try:
            cursor = self.connection.cursor()
            logger.info(sql)
            cursor.execute(sql)
            if cursor.description is not None:
                self._log_result_set(cursor)
        except Exception as e:
            raise ExecutionError(f"Statement failed: {e}\n{sql}") from e
        finally:
            if cursor is not None:
                self._close_quietly(cursor)

    @staticmethod
    def _log_result_set(cursor: Any) -> None:
        columns = [column[0] for column in cursor.description]
        logger.debug("\t".join(columns))
        for row in cursor.fetchall():
            logger.debug("\t".join(str(value) for value in row))

    @staticmethod
    def _close_quietly(cursor: Any) -> None:
        try:
            cursor.close()
        except Exception as e:
            logger.warning("Unable to close cursor: %s", e)
