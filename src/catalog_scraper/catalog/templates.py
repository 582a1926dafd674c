"""Registry of catalog query templates keyed by (family, object type).

The registry is built once at import time from the definitions in queries.py
and exposed read-only. Keys map to one or more variants, newest server
version first.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..exceptions import UnsupportedObjectType, UnsupportedServerVersion
from .filters import FilterSet
from .object_types import BUILTIN_LANGUAGES, SYSTEM_SCHEMAS, ObjectType, QueryFamily, is_shared_object
from .queries import (
    CATALOG_EXTENSION_MEMBERSHIP_QUERY,
    CATALOG_OBJECTS,
    COMMENT_QUERY,
    DEPENDENCY_QUERIES,
    FIRST_NORMAL_OBJECT_ID,
    MIN_SERVER_VERSION,
    SHARED_COMMENT_QUERY,
    CatalogObject,
)
from .resolver import resolution_columns

logger = logging.getLogger(__name__)

TemplateKey = tuple[QueryFamily, ObjectType]


@dataclass(frozen=True)
class QueryTemplate:
    """SQL blueprint for one query family and object type.

    LIST and ATTRIBUTES texts carry the {filters} and {limit} substitution
    points; the auxiliary families carry {oid_field}.
    """

    family: QueryFamily
    object_type: ObjectType
    text: str
    oid_column: Optional[str] = None
    schema_column: Optional[str] = None
    parent_column: Optional[str] = None
    language_column: Optional[str] = None
    keep_system: bool = False
    min_version: int = 0


@dataclass(frozen=True)
class CatalogQuery:
    """A fully assembled query, ready for the executor."""

    family: QueryFamily
    object_type: ObjectType
    sql: str
    params: dict[str, Any] = field(default_factory=dict)
    single_result: bool = False


def _select(definition: CatalogObject, columns: list[str]) -> str:
    order_by = definition.order_by or definition.name_column
    select_list = ",\n    ".join(
        [f"{definition.oid_column} AS oid", f"{definition.name_column} AS name"] + columns
    )
    return (
        f"SELECT\n    {select_list}\n"
        f"FROM {definition.from_clause}\n"
        f"WHERE {definition.where}{{filters}}\n"
        f"ORDER BY {order_by}{{limit}}"
    )


def _filtered_template(family: QueryFamily, definition: CatalogObject, text: str) -> QueryTemplate:
    return QueryTemplate(
        family=family,
        object_type=definition.object_type,
        text=text,
        oid_column=definition.oid_column,
        schema_column=definition.schema_column,
        parent_column=definition.parent_column,
        language_column=definition.language_column,
        keep_system=definition.keep_system,
        min_version=definition.min_version,
    )


def _build_registry() -> Mapping[TemplateKey, tuple[QueryTemplate, ...]]:
    registry: dict[TemplateKey, list[QueryTemplate]] = {}

    def register(template: QueryTemplate) -> None:
        registry.setdefault((template.family, template.object_type), []).append(template)

    for definition in CATALOG_OBJECTS:
        shared = is_shared_object(definition.object_type)
        register(_filtered_template(QueryFamily.LIST, definition, _select(definition, [])))
        register(
            _filtered_template(
                QueryFamily.ATTRIBUTES,
                definition,
                _select(definition, list(definition.columns) + resolution_columns(definition, shared)),
            )
        )
        if definition.has_comment and (QueryFamily.COMMENT, definition.object_type) not in registry:
            register(QueryTemplate(
                QueryFamily.COMMENT,
                definition.object_type,
                SHARED_COMMENT_QUERY if shared else COMMENT_QUERY,
            ))
        if definition.extension_member and (
            (QueryFamily.EXTENSION_MEMBERSHIP, definition.object_type) not in registry
        ):
            text = CATALOG_EXTENSION_MEMBERSHIP_QUERY.format(oid_field="{oid_field}", catalog=definition.catalog)
            register(QueryTemplate(QueryFamily.EXTENSION_MEMBERSHIP, definition.object_type, text))

    for object_type, text in DEPENDENCY_QUERIES.items():
        register(QueryTemplate(QueryFamily.DEPENDENCY, object_type, text))

    return MappingProxyType({
        key: tuple(sorted(variants, key=lambda t: t.min_version, reverse=True))
        for key, variants in registry.items()
    })


TEMPLATES = _build_registry()


def has_template(family: QueryFamily, object_type: ObjectType) -> bool:
    """Check if a template is registered for the family and object type."""
    return (family, object_type) in TEMPLATES


def registered_types(family: QueryFamily) -> frozenset[ObjectType]:
    """Object types with at least one template in the given family."""
    return frozenset(object_type for fam, object_type in TEMPLATES if fam == family)


def select_template(
    family: QueryFamily,
    object_type: ObjectType,
    server_version: Optional[int] = None,
) -> QueryTemplate:
    """Pick the template for a family and object type.

    Returns the newest variant the server supports; the newest overall when
    the server version is unknown.

    Raises:
        UnsupportedObjectType: No template is registered for the pair.
        UnsupportedServerVersion: The server predates MIN_SERVER_VERSION.
    """
    variants = TEMPLATES.get((family, object_type))
    if not variants:
        raise UnsupportedObjectType(family, object_type)
    if server_version is None:
        return variants[0]
    if server_version < MIN_SERVER_VERSION:
        raise UnsupportedServerVersion(server_version, MIN_SERVER_VERSION)
    for template in variants:
        if template.min_version <= server_version:
            return template
    raise UnsupportedServerVersion(server_version, variants[-1].min_version)


def build_query(
    template: QueryTemplate,
    filters: Optional[FilterSet] = None,
    single_result: bool = False,
) -> CatalogQuery:
    """Substitute filter clauses into a LIST or ATTRIBUTES template.

    Filter values travel as bound parameters. Filters the object type cannot
    honour (e.g. a schema on roles) are ignored.
    """
    if template.family not in (QueryFamily.LIST, QueryFamily.ATTRIBUTES):
        raise ValueError(f"{template.family.value} templates are fragments, not standalone queries")

    filters = filters or FilterSet()
    clauses: list[str] = []
    params: dict[str, Any] = {}
    kind = template.object_type.value

    if filters.oids:
        clauses.append(f"({template.oid_column})::text = ANY(%(oids)s::text[])")
        params["oids"] = list(filters.oids)

    if filters.schema:
        if template.schema_column:
            clauses.append(f"{template.schema_column} = %(schema)s")
            params["schema"] = filters.schema
        else:
            logger.debug(f"Ignoring schema filter for {kind}: not schema-scoped")

    if filters.parent_oids:
        if template.parent_column:
            clauses.append(f"({template.parent_column})::text = ANY(%(parent_oids)s::text[])")
            params["parent_oids"] = list(filters.parent_oids)
        else:
            logger.debug(f"Ignoring parent filter for {kind}: not table-scoped")

    if filters.builtin_language is not None:
        if template.language_column:
            operator = "= ANY" if filters.builtin_language else "<> ALL"
            clauses.append(f"{template.language_column} {operator}(%(builtin_languages)s::text[])")
            params["builtin_languages"] = list(BUILTIN_LANGUAGES)
        else:
            logger.debug(f"Ignoring language filter for {kind}")

    # System objects live in the system schemas; unscoped types fall back to
    # the oid range handed out by initdb
    if filters.exclude_system:
        if template.keep_system:
            logger.debug(f"Keeping system {kind} objects: user objects reference them")
        elif template.schema_column:
            clauses.append(f"{template.schema_column} <> ALL(%(system_schemas)s::text[])")
            params["system_schemas"] = list(SYSTEM_SCHEMAS)
        else:
            clauses.append(f"({template.oid_column})::oid >= {FIRST_NORMAL_OBJECT_ID}")

    sql = template.text.format(
        filters="".join(f"\n    AND {clause}" for clause in clauses),
        limit="\nLIMIT 1" if single_result else "",
    )
    return CatalogQuery(
        family=template.family,
        object_type=template.object_type,
        sql=sql,
        params=params,
        single_result=single_result,
    )
