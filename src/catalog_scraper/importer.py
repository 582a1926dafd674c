"""Reads the whole catalog in dependency order."""

import logging
from dataclasses import dataclass, field

from .catalog import Catalog, FilterSet
from .catalog.normalizer import AttributeMap
from .catalog.object_types import IMPORT_ORDER, ImportStep, ObjectType, QueryFamily
from .catalog.templates import has_template
from .config import ScraperConfig

logger = logging.getLogger(__name__)


@dataclass
class ImportBatch:
    """Objects read for one import step."""

    step: ImportStep
    objects: list[AttributeMap] = field(default_factory=list)

    @property
    def object_type(self) -> ObjectType:
        return self.step.object_type


class CatalogImporter:
    """Walks IMPORT_ORDER so every object is read after the objects it references.

    The steps run sequentially on the catalog's single connection.
    """

    def __init__(self, catalog: Catalog, config: ScraperConfig):
        self.catalog = catalog
        self.config = config

    def steps(self) -> list[ImportStep]:
        """Import steps selected by the configuration that have a query behind them."""
        steps = []
        for step in IMPORT_ORDER:
            if not self.config.should_extract(step.object_type):
                continue
            if not has_template(QueryFamily.ATTRIBUTES, step.object_type):
                logger.debug(f"Skipping {step}: not stored in a catalog of its own")
                continue
            steps.append(step)
        return steps

    def run(self) -> list[ImportBatch]:
        """Read every selected object type, in import order."""
        batches = []
        for step in self.steps():
            filters = FilterSet(
                builtin_language=step.builtin_language,
                exclude_system=not self.config.include_system_objects,
            )
            objects = [
                attributes
                for attributes in self.catalog.get_multiple_attributes(step.object_type, filters)
                if self._in_scope(step.object_type, attributes)
            ]
            logger.info(f"Read {len(objects)} objects for {step}")
            batches.append(ImportBatch(step=step, objects=objects))
        return batches

    def _in_scope(self, object_type: ObjectType, attributes: AttributeMap) -> bool:
        if object_type == ObjectType.SCHEMA:
            return self.config.should_include_schema(attributes["name"])
        schema = attributes.get("schema")
        if schema is None:
            return True
        return self.config.should_include_schema(schema)
