"""Catalog Scraper - read PostgreSQL system catalogs into normalized attribute maps."""

__version__ = "0.1.0"

SUPPORTED_BACKENDS = ["postgresql"]

from .catalog import Catalog, FilterSet, ObjectType, QueryFamily  # noqa: E402
from .config import ScraperConfig  # noqa: E402
from .importer import CatalogImporter, ImportBatch  # noqa: E402

__all__ = [
    "__version__",
    "SUPPORTED_BACKENDS",
    "Catalog",
    "CatalogImporter",
    "FilterSet",
    "ImportBatch",
    "ObjectType",
    "QueryFamily",
    "ScraperConfig",
]
