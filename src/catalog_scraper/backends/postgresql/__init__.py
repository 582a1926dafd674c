"""PostgreSQL backend."""

from .connection import PostgreSQLConnection

__all__ = [
    "PostgreSQLConnection",
]
