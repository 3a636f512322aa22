import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

from avroforge.adapters.avro.container import AvroContainerEncoder
from avroforge.adapters.schema_sources.file import FileSchemaSource
from avroforge.domain.records import RawRecord
from avroforge.domain.schema import Schema, parse_schema
from avroforge.services.collapser import BatchCollapser
from avroforge.services.schema_cache import SchemaCache

# tests/conftest.py

FIXTURES = Path(__file__).parent / "fixtures"
GPS_SCHEMA_PATH = FIXTURES / "gpsrecord.avsc"
LOCATOR_HEADER = "flume.avro.schema.url"


@pytest.fixture
def gps_schema_path() -> Path:
    return GPS_SCHEMA_PATH


@pytest.fixture
def gps_schema() -> Schema:
    return parse_schema(GPS_SCHEMA_PATH.read_text(encoding="utf-8"))


@pytest.fixture
def gps_payload() -> Dict[str, Any]:
    """Required fields only; every optional field left out."""
    return {
        "accessid": 5,
        "accessnetwork": 1,
        "beamid": 2,
        "position": {
            "latitude": {"position": 12.5, "sense": "N"},
            "longitude": {"position": 3.1, "sense": "E"},
        },
        "sassite": "A",
        "satelliteid": "S1",
        "time": {"capture": 1000},
    }


@pytest.fixture
def make_raw() -> Callable[..., RawRecord]:
    """
    Return a helper wrapping a payload into an enveloped RawRecord.
    Usage: raw = make_raw(payload, headers={"k": "v"})
    """

    def _make(
        payload: Dict[str, Any],
        envelope_key: str = "gpsrecord",
        headers: Optional[Dict[str, str]] = None,
        locator: str = str(GPS_SCHEMA_PATH),
    ) -> RawRecord:
        hdrs = {LOCATOR_HEADER: locator}
        hdrs.update(headers or {})
        body = json.dumps({"meta": {"source": "test"}, envelope_key: payload}).encode("utf-8")
        return RawRecord(body=body, headers=hdrs)

    return _make


@pytest.fixture
def encoder() -> AvroContainerEncoder:
    return AvroContainerEncoder(sync_marker=b"0123456789abcdef")


@pytest.fixture
def collapser(encoder) -> BatchCollapser:
    return BatchCollapser(SchemaCache(FileSchemaSource()), encoder)


class StaticSchemaSource:
    """Schema source serving fixed texts per locator and counting loads."""

    def __init__(self, texts: Dict[str, str]) -> None:
        self.texts = texts
        self.calls: List[str] = []

    def load(self, locator: str) -> str:
        from avroforge.domain.errors import SchemaLoadError

        self.calls.append(locator)
        if locator not in self.texts:
            raise SchemaLoadError(f"unknown locator {locator}")
        return self.texts[locator]


@pytest.fixture
def static_source() -> Callable[[Dict[str, str]], StaticSchemaSource]:
    return StaticSchemaSource
