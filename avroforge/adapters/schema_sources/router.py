"""Schema Source Router – OCP: pick a source by locator scheme.

Remote sources are built on first use so a file-only deployment never touches
S3 or the registry.
"""
from __future__ import annotations

from typing import Callable, Optional

from confluent_kafka.schema_registry import SchemaRegistryClient

from avroforge.adapters.schema_sources.file import FileSchemaSource
from avroforge.adapters.schema_sources.registry import SCHEME as REGISTRY_SCHEME
from avroforge.adapters.schema_sources.registry import RegistrySchemaSource
from avroforge.adapters.schema_sources.s3 import SCHEMES as S3_SCHEMES
from avroforge.adapters.schema_sources.s3 import S3SchemaSource
from avroforge.config import Config
from avroforge.domain.errors import SchemaLoadError
from avroforge.ports.schema_source import SchemaSource


class SchemaSourceRouter(SchemaSource):
    def __init__(
        self,
        file_source: Optional[SchemaSource] = None,
        s3_factory: Callable[[], SchemaSource] = S3SchemaSource,
        registry_factory: Optional[Callable[[], SchemaSource]] = None,
    ) -> None:
        self._file = file_source or FileSchemaSource()
        self._s3_factory = s3_factory
        self._registry_factory = registry_factory
        self._s3: Optional[SchemaSource] = None
        self._registry: Optional[SchemaSource] = None

    def load(self, locator: str) -> str:
        return self._route(locator).load(locator)

    def _route(self, locator: str) -> SchemaSource:
        if locator.startswith(S3_SCHEMES):
            if self._s3 is None:
                self._s3 = self._s3_factory()
            return self._s3
        if locator.startswith(REGISTRY_SCHEME):
            if self._registry is None:
                if self._registry_factory is None:
                    raise SchemaLoadError(f"no schema registry configured for {locator}")
                self._registry = self._registry_factory()
            return self._registry
        return self._file


def build_schema_source(config: Config) -> SchemaSource:
    return SchemaSourceRouter(
        registry_factory=lambda: RegistrySchemaSource(
            SchemaRegistryClient({"url": config.schema_registry})
        ),
    )
