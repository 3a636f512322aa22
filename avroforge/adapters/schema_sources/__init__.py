"""Schema sources – where schema text comes from, selected by locator scheme."""

from avroforge.adapters.schema_sources.file import FileSchemaSource
from avroforge.adapters.schema_sources.registry import RegistrySchemaSource
from avroforge.adapters.schema_sources.router import SchemaSourceRouter, build_schema_source
from avroforge.adapters.schema_sources.s3 import MinioConfig, S3SchemaSource

__all__ = [
    "FileSchemaSource",
    "MinioConfig",
    "RegistrySchemaSource",
    "S3SchemaSource",
    "SchemaSourceRouter",
    "build_schema_source",
]
