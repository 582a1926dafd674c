"""Custom exceptions for the catalog scraper."""


class CatalogScraperError(Exception):
    """Base exception for all catalog scraper errors."""

    pass


class ConnectionError(CatalogScraperError):
    """Error establishing database connection."""

    pass


class ConfigurationError(CatalogScraperError):
    """Error in configuration or parameters."""

    pass


class BackendNotAvailableError(CatalogScraperError):
    """Required backend driver is not installed."""

    pass


class UnsupportedObjectType(CatalogScraperError):
    """No catalog query is registered for the requested family and object type."""

    def __init__(self, family, object_type):
        self.family = getattr(family, "value", family)
        self.object_type = getattr(object_type, "value", object_type)
        super().__init__(f"No {self.family} query registered for object type '{self.object_type}'")


class QueryExecutionError(CatalogScraperError):
    """A catalog query failed on the server."""

    pass


class MalformedResult(CatalogScraperError):
    """A catalog row is missing required fields or holds an unexpected value."""

    pass


class UnsupportedServerVersion(CatalogScraperError):
    """The server is older than the catalog queries support."""

    def __init__(self, server_version: int, min_version: int):
        self.server_version = server_version
        self.min_version = min_version
        super().__init__(
            f"PostgreSQL server version {server_version} is not supported; "
            f"{min_version} or later is required"
        )
