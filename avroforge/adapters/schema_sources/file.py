"""Local schema files: a plain path or a file:// URI."""
from __future__ import annotations

from pathlib import Path
from urllib.parse import unquote, urlparse

from avroforge.domain.errors import SchemaLoadError
from avroforge.ports.schema_source import SchemaSource


class FileSchemaSource(SchemaSource):
    def load(self, locator: str) -> str:
        path = _to_path(locator)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SchemaLoadError(f"cannot read schema file {path}: {exc}") from exc


def _to_path(locator: str) -> Path:
    if locator.startswith("file://"):
        return Path(unquote(urlparse(locator).path))
    return Path(locator)
