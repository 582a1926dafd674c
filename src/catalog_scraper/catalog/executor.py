"""Runs assembled catalog queries on the bound connection."""

import logging
from typing import Any

from ..base.connection import BaseConnection
from .templates import CatalogQuery

logger = logging.getLogger(__name__)


class QueryExecutor:
    """Executes catalog queries one at a time on a single connection.

    Failures surface as QueryExecutionError from the connection; nothing is
    retried here.
    """

    def __init__(self, connection: BaseConnection):
        self.connection = connection

    def execute(self, query: CatalogQuery, single_result: bool = False) -> list[dict[str, Any]]:
        """Run a query and return its rows, at most one when single_result is set."""
        single_result = single_result or query.single_result
        logger.debug(
            f"Running {query.family.value} query for {query.object_type.value}"
            f" (params={query.params}):\n{query.sql}"
        )
        rows = self.connection.execute_dict(query.sql, query.params)
        if single_result:
            rows = rows[:1]
        logger.debug(f"{query.family.value} query for {query.object_type.value} returned {len(rows)} rows")
        return rows
