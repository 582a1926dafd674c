"""System catalog introspection: templates, normalization and accessors."""

from .catalog import Catalog
from .executor import QueryExecutor
from .filters import FilterSet
from .normalizer import BOOL_FALSE, BOOL_TRUE, hyphenate_keys, normalize, normalize_booleans
from .object_types import IMPORT_ORDER, ImportStep, ObjectType, QueryFamily
from .templates import CatalogQuery, QueryTemplate, build_query, select_template

__all__ = [
    "Catalog",
    "QueryExecutor",
    "FilterSet",
    "BOOL_TRUE",
    "BOOL_FALSE",
    "hyphenate_keys",
    "normalize",
    "normalize_booleans",
    "IMPORT_ORDER",
    "ImportStep",
    "ObjectType",
    "QueryFamily",
    "CatalogQuery",
    "QueryTemplate",
    "build_query",
    "select_template",
]
