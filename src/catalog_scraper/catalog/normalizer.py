"""Reshape raw catalog rows into attribute maps.

Consumers of attribute maps look up hyphenated keys and treat an empty value
as false. Two independent rewrites get a row there:

* hyphenate_keys: "conn_limit" -> "conn-limit"
* normalize_booleans: values of "*_bool"/"*-bool" fields become "1" or ""

Both are pure and idempotent; normalize() applies them in sequence and
checks the oid/name invariant.
"""

from typing import Any, Mapping, Optional

from ..exceptions import MalformedResult
from .object_types import ObjectType

BOOL_TRUE = "1"
BOOL_FALSE = ""

PGSQL_TRUE = "t"
PGSQL_FALSE = "f"

BOOL_SUFFIXES = ("_bool", "-bool")

REQUIRED_ATTRIBUTES = ("oid", "name")

_TRUE_VALUES = frozenset({PGSQL_TRUE, BOOL_TRUE})
_FALSE_VALUES = frozenset({PGSQL_FALSE, BOOL_FALSE})

AttributeMap = dict[str, str]


def is_bool_field(name: str) -> bool:
    return name.endswith(BOOL_SUFFIXES)


def hyphenate_keys(row: Mapping[str, Any]) -> AttributeMap:
    """Replace underscores in field names by hyphens and render values as text.

    Raises:
        MalformedResult: Two field names map to the same hyphenated key.
    """
    attributes: AttributeMap = {}
    for name, value in row.items():
        key = str(name).replace("_", "-")
        if key in attributes:
            raise MalformedResult(f"Fields collide on attribute '{key}'")
        attributes[key] = "" if value is None else str(value)
    return attributes


def normalize_booleans(attributes: Mapping[str, Any]) -> AttributeMap:
    """Map boolean fields to BOOL_TRUE / BOOL_FALSE.

    Raises:
        MalformedResult: A boolean field holds something other than t, f,
            1, an empty string or NULL.
    """
    normalized: AttributeMap = {}
    for name, value in attributes.items():
        if value is None:  # SQL NULL reads as false
            value = ""
        if is_bool_field(name):
            if value in _TRUE_VALUES:
                value = BOOL_TRUE
            elif value in _FALSE_VALUES:
                value = BOOL_FALSE
            else:
                raise MalformedResult(f"Unexpected value {value!r} in boolean field '{name}'")
        normalized[name] = value
    return normalized


def normalize(row: Mapping[str, Any], object_type: Optional[ObjectType] = None) -> AttributeMap:
    """Turn one catalog row into an attribute map.

    Raises:
        MalformedResult: The row lacks an oid or a name, or a boolean field
            holds an unexpected value.
    """
    attributes = normalize_booleans(hyphenate_keys(row))

    kind = object_type.value if object_type else "object"
    missing = [name for name in REQUIRED_ATTRIBUTES if name not in attributes]
    if missing:
        raise MalformedResult(f"Catalog row for {kind} lacks {', '.join(missing)}: {sorted(attributes)}")
    if not attributes["oid"]:
        raise MalformedResult(f"Catalog row for {kind} '{attributes['name']}' has an empty oid")
    return attributes


def normalize_rows(rows: list[Mapping[str, Any]], object_type: Optional[ObjectType] = None) -> list[AttributeMap]:
    """Normalize every row; any malformed row fails the whole batch."""
    return [normalize(row, object_type) for row in rows]
