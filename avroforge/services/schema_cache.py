"""Schema Cache – SRP: resolve a schema once, then hand out the same one forever.

First wins: the locator is only consulted until a resolution succeeds.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

from avroforge.domain.errors import SchemaLoadError
from avroforge.domain.schema import Schema, parse_schema
from avroforge.ports.schema_source import SchemaSource

logger = logging.getLogger(__name__)


class SchemaCache:
    """Set-once schema holder, safe for concurrent first use.

    Concurrent first callers serialize on a lock; the first successful load is
    what every caller gets. A failed load leaves the cache unresolved so the
    next call retries. There is no expiry or refresh.
    """

    def __init__(self, source: SchemaSource) -> None:
        self._source = source
        self._schema: Optional[Schema] = None
        self._lock = threading.Lock()

    @property
    def resolved(self) -> bool:
        return self._schema is not None

    def resolve(self, locator: str) -> Schema:
        schema = self._schema
        if schema is not None:
            return schema
        with self._lock:
            if self._schema is None:
                self._schema = self._load(locator)
            return self._schema

    def _load(self, locator: str) -> Schema:
        if not locator:
            logger.error("SCHEMA_LOAD_FAILED | locator=<empty> | error=no schema locator")
            raise SchemaLoadError("schema locator is empty")
        try:
            schema = parse_schema(self._source.load(locator))
        except SchemaLoadError as exc:
            logger.error("SCHEMA_LOAD_FAILED | locator=%s | error=%s", locator, exc)
            raise
        logger.info(
            "SCHEMA_RESOLVED | locator=%s | schema=%s | fields=[%s]",
            locator,
            schema.name,
            ", ".join(schema.root.field_names),
        )
        return schema
