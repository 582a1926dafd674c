"""PostgreSQL database connection."""

import logging
from typing import Any, Optional

import psycopg

from ...base.connection import BaseConnection, QueryParams
from ...config import ScraperConfig
from ...exceptions import ConnectionError, MalformedResult, QueryExecutionError

logger = logging.getLogger(__name__)


class PostgreSQLConnection(BaseConnection):
    """Read-only PostgreSQL connection using psycopg3.

    Rows come back as dictionaries of text so that catalog values are
    interpreted in one place, by the attribute normalizer.
    """

    def __init__(self, config: ScraperConfig):
        super().__init__(config)
        self._connection: Optional[psycopg.Connection] = None

    def connect(self) -> None:
        """Establish database connection."""
        try:
            conn_params = {
                "host": self.config.host,
                "port": self.config.port or 5432,
                "dbname": self.config.database,
                "user": self.config.username,
                "options": "-c default_transaction_read_only=on",
                "autocommit": True,
            }
            if self.config.password:
                conn_params["password"] = self.config.password

            logger.debug(f"Connecting to PostgreSQL: {self.config.host}:{conn_params['port']}/{self.config.database}")
            self._connection = psycopg.connect(**conn_params)
            logger.info(f"Connected to {self.config.database}")
        except psycopg.Error as e:
            raise ConnectionError(f"Failed to connect to database: {e}") from e

    def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            logger.info("Disconnected from database")

    @property
    def connection(self) -> psycopg.Connection:
        """Get the active connection."""
        if not self._connection:
            raise ConnectionError("Not connected to database")
        return self._connection

    @property
    def server_version(self) -> Optional[int]:
        """Server version reported at connection time."""
        if not self._connection:
            return None
        return self._connection.info.server_version

    def execute_dict(self, query: str, params: QueryParams = ()) -> list[dict[str, Any]]:
        """Execute a query and return results as dictionaries of text.

        Values are taken from the raw text-format result, exactly as the
        server printed them; NULL stays None. Nothing goes through psycopg's
        type loaders, so values Python cannot represent (e.g. an 'infinity'
        timestamp) are returned like any other.
        """
        try:
            with self.connection.cursor() as cur:
                cur.execute(query, params or None)
                result = cur.pgresult
                if result is None:
                    return []
                encoding = self.connection.info.encoding
                names = [result.fname(column).decode(encoding) for column in range(result.nfields)]
                if len(set(names)) != len(names):
                    duplicates = sorted({name for name in names if names.count(name) > 1})
                    raise MalformedResult(f"Catalog query returned duplicate columns: {', '.join(duplicates)}")
                rows = []
                for row in range(result.ntuples):
                    values = (result.get_value(row, column) for column in range(result.nfields))
                    rows.append({
                        name: None if value is None else bytes(value).decode(encoding)
                        for name, value in zip(names, values)
                    })
                return rows
        except psycopg.Error as e:
            raise QueryExecutionError(f"Catalog query failed: {e}") from e

    def execute_scalar(self, query: str, params: QueryParams = ()) -> Any:
        """Execute a query and return a single value."""
        try:
            return super().execute_scalar(query, params)
        except psycopg.Error as e:
            raise QueryExecutionError(f"Catalog query failed: {e}") from e

    def get_version(self) -> str:
        """Get PostgreSQL version."""
        return self.execute_scalar("SELECT version()") or "Unknown"
