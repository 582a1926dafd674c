"""Configuration dataclasses for the catalog scraper."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .catalog.object_types import SYSTEM_SCHEMAS, ObjectType
from .exceptions import ConfigurationError

DEFAULT_EXCLUDED_SCHEMAS = list(SYSTEM_SCHEMAS)


@dataclass
class ScraperConfig:
    """Configuration for the catalog scraper."""

    # Database type
    db_type: str = "postgresql"

    # Connection parameters
    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    # Output settings; None writes to stdout
    output: Optional[Path] = None

    # Filtering
    include_schemas: list[str] = field(default_factory=list)
    exclude_schemas: list[str] = field(default_factory=list)
    object_types: list[str] = field(default_factory=lambda: ["all"])
    include_system_objects: bool = False

    # Behavior
    verbosity: int = 0

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if isinstance(self.output, str):
            self.output = Path(self.output)

        if not self.exclude_schemas:
            self.exclude_schemas = list(DEFAULT_EXCLUDED_SCHEMAS)

        if self.port is None and self.host:
            self.port = 5432

    def validate(self) -> None:
        """Validate the configuration is complete and consistent."""
        if self.db_type != "postgresql":
            raise ConfigurationError(f"Unsupported database type: {self.db_type}")
        if not self.host:
            raise ConfigurationError("Host is required")
        if not self.database:
            raise ConfigurationError("Database is required")
        if not self.username:
            raise ConfigurationError("Username is required")

        known = {object_type.value for object_type in ObjectType}
        unknown = [name for name in self.object_types if name != "all" and name not in known]
        if unknown:
            raise ConfigurationError(f"Unknown object types: {', '.join(unknown)}")

    def should_include_schema(self, schema_name: str) -> bool:
        """Check if a schema should be included based on filters."""
        if self.include_schemas:
            return schema_name in self.include_schemas
        return schema_name not in self.exclude_schemas

    def should_extract(self, object_type: ObjectType) -> bool:
        """Check if an object type should be extracted."""
        return "all" in self.object_types or object_type.value in self.object_types
