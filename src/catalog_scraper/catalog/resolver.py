"""Sub-select fragments that resolve an object's references in the same query.

The fragments are embedded as extra columns of ATTRIBUTES queries, so an
object and everything it points to (owner, schema, tablespace, collation...)
come back in one round trip instead of one lookup per reference.
"""

from typing import Optional

from ..exceptions import UnsupportedObjectType
from .object_types import ObjectType, QueryFamily
from .queries import (
    CATALOG_EXTENSION_MEMBERSHIP_QUERY,
    COMMENT_QUERY,
    DEPENDENCY_QUERIES,
    EXTENSION_MEMBERSHIP_QUERY,
    SHARED_COMMENT_QUERY,
    CatalogObject,
    Dependency,
)


def dependency_query(oid_field: str, object_type: ObjectType) -> str:
    """Return a sub-select yielding the name of the object referenced by oid_field."""
    try:
        query = DEPENDENCY_QUERIES[object_type]
    except KeyError:
        raise UnsupportedObjectType(QueryFamily.DEPENDENCY, object_type) from None
    return f"({query.format(oid_field=oid_field)})"


def comment_query(oid_field: str, is_shared_object: bool = False) -> str:
    """Return a sub-select yielding the comment of the object identified by oid_field.

    Cluster-wide objects keep their comments in pg_shdescription.
    """
    query = SHARED_COMMENT_QUERY if is_shared_object else COMMENT_QUERY
    return f"({query.format(oid_field=oid_field)})"


def extension_membership_query(oid_field: str, catalog: Optional[str] = None) -> str:
    """Return a boolean sub-select telling whether an extension created the object.

    Extension members are rendered as read-only system objects downstream;
    this only reports the fact. Passing the object's catalog (e.g. "pg_proc")
    restricts the match to that catalog's oids.
    """
    if catalog is None:
        return f"({EXTENSION_MEMBERSHIP_QUERY.format(oid_field=oid_field)})"
    return f"({CATALOG_EXTENSION_MEMBERSHIP_QUERY.format(oid_field=oid_field, catalog=catalog)})"


def dependency_columns(dependency: Dependency) -> list[str]:
    """Select-list entries for one reference: the resolved name and the raw oid."""
    return [
        f"{dependency_query(dependency.oid_field, dependency.object_type)} AS {dependency.attribute}",
        f"{dependency.oid_field} AS {dependency.attribute}_oid",
    ]


def resolution_columns(definition: CatalogObject, is_shared_object: bool) -> list[str]:
    """All auxiliary select-list entries for an object type's ATTRIBUTES query."""
    columns: list[str] = []
    for dependency in definition.dependencies:
        columns.extend(dependency_columns(dependency))
    if definition.has_comment:
        columns.append(f"{comment_query(definition.oid_column, is_shared_object)} AS comment")
    if definition.extension_member:
        columns.append(
            f"{extension_membership_query(definition.oid_column, definition.catalog)} AS from_extension_bool"
        )
    return columns
