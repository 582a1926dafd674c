"""Shared fixtures: a fake connection serving canned catalog rows."""

from typing import Any, Optional

import pytest
from catalog_scraper.base.connection import BaseConnection
from catalog_scraper.catalog import Catalog, ObjectType
from catalog_scraper.catalog.queries import CATALOG_OBJECTS, FIRST_NORMAL_OBJECT_ID
from catalog_scraper.exceptions import QueryExecutionError


class FakeConnection(BaseConnection):
    """Records every query and answers from in-memory rows keyed by object type.

    Rows use raw catalog conventions (underscored names, t/f booleans) and
    are filtered by the bound parameters the way the server would.
    """

    def __init__(
        self,
        rows: Optional[dict[ObjectType, list[dict[str, Any]]]] = None,
        server_version: Optional[int] = None,
        error: Optional[str] = None,
    ):
        super().__init__(config=None)
        self.rows = rows or {}
        self.version = server_version
        self.error = error
        self.queries: list[tuple[str, dict]] = []

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    @property
    def connection(self) -> "FakeConnection":
        return self

    @property
    def server_version(self) -> Optional[int]:
        return self.version

    def object_type_of(self, sql: str) -> ObjectType:
        for definition in CATALOG_OBJECTS:
            if f"\nFROM {definition.from_clause}\n" in sql:
                return definition.object_type
        raise AssertionError(f"Unrecognized catalog query:\n{sql}")

    def execute_dict(self, query: str, params=()) -> list[dict[str, Any]]:
        params = dict(params or {})
        self.queries.append((query, params))
        if self.error:
            raise QueryExecutionError(self.error)

        rows = list(self.rows.get(self.object_type_of(query), []))
        if "oids" in params:
            rows = [row for row in rows if row["oid"] in params["oids"]]
        if "schema" in params:
            rows = [row for row in rows if row.get("schema", row["name"]) == params["schema"]]
        if "parent_oids" in params:
            rows = [row for row in rows if row.get("table_oid") in params["parent_oids"]]
        if "builtin_languages" in params:
            builtin = "= ANY(%(builtin_languages)s" in query
            rows = [
                row for row in rows
                if (row.get("language", row["name"]) in params["builtin_languages"]) == builtin
            ]
        if "system_schemas" in params:
            rows = [row for row in rows if row.get("schema", row["name"]) not in params["system_schemas"]]
        if f">= {FIRST_NORMAL_OBJECT_ID}" in query:
            rows = [row for row in rows if int(row["oid"].split(":")[0]) >= FIRST_NORMAL_OBJECT_ID]
        if "\nLIMIT 1" in query:
            rows = rows[:1]
        return rows


ROLES = [
    {"oid": "10", "name": "postgres", "superuser_bool": "t", "login_bool": "t", "conn_limit": "-1"},
    {"oid": "16384", "name": "app_owner", "superuser_bool": "f", "login_bool": "t", "conn_limit": "10"},
]

TABLESPACES = [
    {"oid": "16390", "name": "fast_disk", "directory": "/mnt/fast", "owner": "app_owner",
     "owner_oid": "16384", "comment": None},
]

DATABASES = [
    {"oid": "16400", "name": "appdb", "encoding": "UTF8", "is_template_bool": "f",
     "allow_conns_bool": "t", "owner": "app_owner", "owner_oid": "16384",
     "tablespace": "fast_disk", "tablespace_oid": "16390", "comment": "application data"},
]

SCHEMAS = [
    {"oid": "2200", "name": "public", "owner": "postgres", "owner_oid": "10",
     "from_extension_bool": "f"},
    {"oid": "16410", "name": "billing", "owner": "app_owner", "owner_oid": "16384",
     "from_extension_bool": "f"},
]

FUNCTIONS = [
    {"oid": "16420", "name": "touch_updated_at", "schema": "public", "schema_oid": "2200",
     "language": "plpgsql", "owner": "app_owner", "owner_oid": "16384",
     "security_definer_bool": "f", "strict_bool": "t", "from_extension_bool": "f"},
    {"oid": "16430", "name": "invoice_total", "schema": "billing", "schema_oid": "16410",
     "language": "sql", "owner": "app_owner", "owner_oid": "16384",
     "security_definer_bool": "t", "strict_bool": "f", "from_extension_bool": "f"},
    {"oid": "16440", "name": "uuid_generate_v4", "schema": "billing", "schema_oid": "16410",
     "language": "c", "owner": "postgres", "owner_oid": "10",
     "security_definer_bool": "f", "strict_bool": "t", "from_extension_bool": "t"},
]

TYPES = [
    {"oid": "23", "name": "int4", "schema": "pg_catalog", "schema_oid": "11", "owner": "postgres",
     "owner_oid": "10", "configuration": "base", "by_value_bool": "t", "from_extension_bool": "f"},
    {"oid": "16600", "name": "invoice_status", "schema": "billing", "schema_oid": "16410",
     "owner": "app_owner", "owner_oid": "16384", "configuration": "enumeration",
     "enumerations": "{draft,sent,paid}", "by_value_bool": "t", "from_extension_bool": "f"},
]

TABLES = [
    {"oid": "16500", "name": "accounts", "schema": "public", "schema_oid": "2200",
     "owner": "app_owner", "owner_oid": "16384", "unlogged_bool": "f"},
    {"oid": "16510", "name": "invoices", "schema": "billing", "schema_oid": "16410",
     "owner": "app_owner", "owner_oid": "16384", "unlogged_bool": "f"},
]

COLUMNS = [
    {"oid": "16500:1", "name": "id", "table_oid": "16500", "schema": "public", "position": "1",
     "not_null_bool": "t"},
    {"oid": "16500:2", "name": "email", "table_oid": "16500", "schema": "public", "position": "2",
     "not_null_bool": "f"},
    {"oid": "16510:1", "name": "id", "table_oid": "16510", "schema": "billing", "position": "1",
     "not_null_bool": "t"},
]


@pytest.fixture
def catalog_rows() -> dict[ObjectType, list[dict[str, Any]]]:
    return {
        ObjectType.ROLE: ROLES,
        ObjectType.TABLESPACE: TABLESPACES,
        ObjectType.DATABASE: DATABASES,
        ObjectType.SCHEMA: SCHEMAS,
        ObjectType.FUNCTION: FUNCTIONS,
        ObjectType.TYPE: TYPES,
        ObjectType.TABLE: TABLES,
        ObjectType.COLUMN: COLUMNS,
    }


@pytest.fixture
def connection(catalog_rows) -> FakeConnection:
    return FakeConnection(catalog_rows, server_version=160002)


@pytest.fixture
def catalog(connection) -> Catalog:
    return Catalog(connection)
