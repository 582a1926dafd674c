"""Catalog object types and the order in which they must be imported."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ObjectType(str, Enum):
    """Catalog entities the scraper can query."""

    ROLE = "role"
    TABLESPACE = "tablespace"
    DATABASE = "database"
    SCHEMA = "schema"
    EXTENSION = "extension"
    FUNCTION = "function"
    TYPE = "type"
    LANGUAGE = "language"
    AGGREGATE = "aggregate"
    OPERATOR = "operator"
    OPCLASS = "opclass"
    OPFAMILY = "opfamily"
    COLLATION = "collation"
    CONVERSION = "conversion"
    TABLE = "table"
    COLUMN = "column"
    INDEX = "index"
    RULE = "rule"
    TRIGGER = "trigger"
    CONSTRAINT = "constraint"
    CAST = "cast"
    INHERITANCE = "inheritance"
    VIEW = "view"
    PERMISSION = "permission"


class QueryFamily(str, Enum):
    """Kinds of catalog query."""

    LIST = "list"
    ATTRIBUTES = "attributes"
    DEPENDENCY = "dependency"
    COMMENT = "comment"
    EXTENSION_MEMBERSHIP = "extension-membership"


# Cluster-wide objects; their comments live in pg_shdescription
SHARED_OBJECT_TYPES = frozenset({ObjectType.ROLE, ObjectType.TABLESPACE, ObjectType.DATABASE})

# Languages shipped with the server. Functions written in them are imported
# before user types, everything else after user-defined languages.
BUILTIN_LANGUAGES = ("c", "sql", "internal")

# Namespaces holding the objects created with the cluster
SYSTEM_SCHEMAS = ("pg_catalog", "information_schema", "pg_toast")


def is_shared_object(object_type: ObjectType) -> bool:
    """Check if objects of this type are shared across the cluster."""
    return object_type in SHARED_OBJECT_TYPES


@dataclass(frozen=True)
class ImportStep:
    """One position in the import order.

    builtin_language narrows functions and languages: True keeps objects tied
    to the built-in languages, False keeps the user-defined ones, None keeps all.
    """

    object_type: ObjectType
    builtin_language: Optional[bool] = None

    def __str__(self) -> str:
        if self.builtin_language is None:
            return self.object_type.value
        kind = "builtin" if self.builtin_language else "user"
        return f"{self.object_type.value} ({kind})"


# Later steps reference earlier ones by oid.
IMPORT_ORDER: tuple[ImportStep, ...] = (
    ImportStep(ObjectType.ROLE),
    ImportStep(ObjectType.TABLESPACE),
    ImportStep(ObjectType.DATABASE),
    ImportStep(ObjectType.SCHEMA),
    ImportStep(ObjectType.EXTENSION),
    ImportStep(ObjectType.FUNCTION, builtin_language=True),
    ImportStep(ObjectType.TYPE),
    ImportStep(ObjectType.LANGUAGE, builtin_language=False),
    ImportStep(ObjectType.FUNCTION, builtin_language=False),
    ImportStep(ObjectType.AGGREGATE),
    ImportStep(ObjectType.OPERATOR),
    ImportStep(ObjectType.OPFAMILY),
    ImportStep(ObjectType.OPCLASS),
    ImportStep(ObjectType.COLLATION),
    ImportStep(ObjectType.CONVERSION),
    ImportStep(ObjectType.TABLE),
    ImportStep(ObjectType.COLUMN),
    ImportStep(ObjectType.INDEX),
    ImportStep(ObjectType.RULE),
    ImportStep(ObjectType.TRIGGER),
    ImportStep(ObjectType.CONSTRAINT),
    ImportStep(ObjectType.CAST),
    ImportStep(ObjectType.INHERITANCE),
    ImportStep(ObjectType.VIEW),
    ImportStep(ObjectType.PERMISSION),
)


def import_position(object_type: ObjectType) -> int:
    """Index of the first import step for an object type."""
    for position, step in enumerate(IMPORT_ORDER):
        if step.object_type == object_type:
            return position
    raise ValueError(f"{object_type} is not part of the import order")
