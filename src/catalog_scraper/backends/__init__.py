"""Database backend implementations."""

from typing import TYPE_CHECKING, Type

from ..exceptions import BackendNotAvailableError, ConfigurationError

if TYPE_CHECKING:
    from ..base import BaseConnection


def get_backend(db_type: str) -> Type["BaseConnection"]:
    """Get the connection class for a database type."""
    if db_type == "postgresql":
        try:
            from .postgresql import PostgreSQLConnection
            return PostgreSQLConnection
        except ImportError as e:
            raise BackendNotAvailableError(
                f"PostgreSQL backend requires psycopg. Install with: pip install psycopg\n"
                f"Error: {e}"
            )

    raise ConfigurationError(
        f"Unknown database type: {db_type}. "
        f"Supported types: postgresql"
    )
