"""Accessors reading normalized attribute maps from the system catalog."""

import logging
from typing import Iterable, Optional

from ..base.connection import BaseConnection
from .executor import QueryExecutor
from .filters import FilterSet
from .normalizer import AttributeMap, normalize_rows
from .object_types import ObjectType, QueryFamily
from .templates import build_query, select_template

logger = logging.getLogger(__name__)


class Catalog:
    """Reads catalog objects from a live PostgreSQL database.

    Every call queries the database again; nothing is cached between calls.
    The connection is used for one query at a time and may be swapped with
    set_connection() between calls.
    """

    def __init__(self, connection: BaseConnection):
        self.executor = QueryExecutor(connection)

    @property
    def connection(self) -> BaseConnection:
        return self.executor.connection

    def set_connection(self, connection: BaseConnection) -> None:
        """Rebind the catalog to another database session."""
        self.executor = QueryExecutor(connection)

    def _run(
        self,
        family: QueryFamily,
        object_type: ObjectType,
        filters: Optional[FilterSet] = None,
        single_result: bool = False,
    ) -> list[AttributeMap]:
        # Template lookup comes first so unsupported types never reach the server
        template = select_template(family, object_type, self.connection.server_version)
        query = build_query(template, filters, single_result)
        rows = self.executor.execute(query, single_result)
        return normalize_rows(rows, object_type)

    def get_object_count(self, object_type: ObjectType, schema: str = "") -> int:
        """Count objects of a type, optionally within one schema."""
        return len(self._run(QueryFamily.LIST, object_type, FilterSet(schema=schema)))

    def get_objects(self, object_type: ObjectType, schema: str = "") -> dict[str, str]:
        """Map oids to names for all objects of a type, in catalog order."""
        rows = self._run(QueryFamily.LIST, object_type, FilterSet(schema=schema))
        return {row["oid"]: row["name"] for row in rows}

    def get_attributes(self, object_type: ObjectType, oid: str) -> AttributeMap:
        """Full attributes of a single object, or an empty map if it does not exist."""
        filters = FilterSet(oids=(oid,))
        if not filters.oids:
            # A blank oid names no object; an empty filter would match them all
            logger.debug(f"No {object_type.value} has a blank oid")
            return {}
        rows = self._run(QueryFamily.ATTRIBUTES, object_type, filters, single_result=True)
        return rows[0] if rows else {}

    def get_multiple_attributes(
        self, object_type: ObjectType, filters: Optional[FilterSet] = None
    ) -> list[AttributeMap]:
        """Full attributes of every object matching the filters, in catalog order."""
        attributes = self._run(QueryFamily.ATTRIBUTES, object_type, filters)
        logger.debug(f"Read {len(attributes)} {object_type.value} objects")
        return attributes

    def get_roles(self, filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        return self.get_multiple_attributes(ObjectType.ROLE, FilterSet(oids=tuple(filter_oids)))

    def get_tablespaces(self, filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        return self.get_multiple_attributes(ObjectType.TABLESPACE, FilterSet(oids=tuple(filter_oids)))

    def get_databases(self, filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        return self.get_multiple_attributes(ObjectType.DATABASE, FilterSet(oids=tuple(filter_oids)))

    def get_schemas(self, filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        return self.get_multiple_attributes(ObjectType.SCHEMA, FilterSet(oids=tuple(filter_oids)))

    def get_languages(
        self, filter_oids: Iterable[str] = (), builtin: Optional[bool] = None
    ) -> list[AttributeMap]:
        """Languages; builtin=False keeps only user-defined ones."""
        filters = FilterSet(oids=tuple(filter_oids), builtin_language=builtin)
        return self.get_multiple_attributes(ObjectType.LANGUAGE, filters)

    def get_extensions(self, schema: str = "", filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        filters = FilterSet(oids=tuple(filter_oids), schema=schema)
        return self.get_multiple_attributes(ObjectType.EXTENSION, filters)

    def get_functions(
        self,
        schema: str = "",
        filter_oids: Iterable[str] = (),
        builtin_language: Optional[bool] = None,
    ) -> list[AttributeMap]:
        """Functions and procedures, optionally split by built-in vs user languages."""
        filters = FilterSet(oids=tuple(filter_oids), schema=schema, builtin_language=builtin_language)
        return self.get_multiple_attributes(ObjectType.FUNCTION, filters)

    def _schema_objects(
        self, object_type: ObjectType, schema: str, filter_oids: Iterable[str]
    ) -> list[AttributeMap]:
        return self.get_multiple_attributes(object_type, FilterSet(oids=tuple(filter_oids), schema=schema))

    def get_types(self, schema: str = "", filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        return self._schema_objects(ObjectType.TYPE, schema, filter_oids)

    def get_aggregates(self, schema: str = "", filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        return self._schema_objects(ObjectType.AGGREGATE, schema, filter_oids)

    def get_operators(self, schema: str = "", filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        return self._schema_objects(ObjectType.OPERATOR, schema, filter_oids)

    def get_op_families(self, schema: str = "", filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        return self._schema_objects(ObjectType.OPFAMILY, schema, filter_oids)

    def get_op_classes(self, schema: str = "", filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        return self._schema_objects(ObjectType.OPCLASS, schema, filter_oids)

    def get_collations(self, schema: str = "", filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        return self._schema_objects(ObjectType.COLLATION, schema, filter_oids)

    def get_conversions(self, schema: str = "", filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        return self._schema_objects(ObjectType.CONVERSION, schema, filter_oids)

    def get_tables(self, schema: str = "", filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        return self._schema_objects(ObjectType.TABLE, schema, filter_oids)

    def get_views(self, schema: str = "", filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        return self._schema_objects(ObjectType.VIEW, schema, filter_oids)

    def get_casts(self, filter_oids: Iterable[str] = ()) -> list[AttributeMap]:
        return self.get_multiple_attributes(ObjectType.CAST, FilterSet(oids=tuple(filter_oids)))

    def _table_objects(
        self,
        object_type: ObjectType,
        schema: str,
        table_oids: Iterable[str],
        filter_oids: Iterable[str],
    ) -> list[AttributeMap]:
        filters = FilterSet(oids=tuple(filter_oids), schema=schema, parent_oids=tuple(table_oids))
        return self.get_multiple_attributes(object_type, filters)

    def get_columns(
        self, schema: str = "", table_oids: Iterable[str] = (), filter_oids: Iterable[str] = ()
    ) -> list[AttributeMap]:
        """Table columns; their oids are "<table oid>:<attnum>"."""
        return self._table_objects(ObjectType.COLUMN, schema, table_oids, filter_oids)

    def get_indexes(
        self, schema: str = "", table_oids: Iterable[str] = (), filter_oids: Iterable[str] = ()
    ) -> list[AttributeMap]:
        return self._table_objects(ObjectType.INDEX, schema, table_oids, filter_oids)

    def get_rules(
        self, schema: str = "", table_oids: Iterable[str] = (), filter_oids: Iterable[str] = ()
    ) -> list[AttributeMap]:
        return self._table_objects(ObjectType.RULE, schema, table_oids, filter_oids)

    def get_triggers(
        self, schema: str = "", table_oids: Iterable[str] = (), filter_oids: Iterable[str] = ()
    ) -> list[AttributeMap]:
        return self._table_objects(ObjectType.TRIGGER, schema, table_oids, filter_oids)

    def get_constraints(
        self, schema: str = "", table_oids: Iterable[str] = (), filter_oids: Iterable[str] = ()
    ) -> list[AttributeMap]:
        return self._table_objects(ObjectType.CONSTRAINT, schema, table_oids, filter_oids)

    def get_inheritances(
        self, schema: str = "", table_oids: Iterable[str] = (), filter_oids: Iterable[str] = ()
    ) -> list[AttributeMap]:
        """Parent links of child tables; their oids are "<child oid>:<seqno>"."""
        return self._table_objects(ObjectType.INHERITANCE, schema, table_oids, filter_oids)
