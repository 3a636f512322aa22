import json

import pytest

from avroforge.domain.errors import EnvelopeKeyMissingError, PayloadFormatError
from avroforge.services.extractor import PayloadExtractor


def test_extracts_envelope_value():
    body = json.dumps({"header": {"id": 1}, "gpsrecord": {"beamid": 2}}).encode()
    assert PayloadExtractor().extract(body, "gpsrecord") == {"beamid": 2}


@pytest.mark.parametrize("body", [b"", b"{oops", b"\xff\xfe\x00", b"[1, 2]", b"42"])
def test_malformed_bodies(body):
    with pytest.raises(PayloadFormatError):
        PayloadExtractor().extract(body, "gpsrecord")


@pytest.mark.parametrize(
    "document",
    [{"other": {"beamid": 2}}, {"gpsrecord": [1, 2]}, {"gpsrecord": "text"}, {"gpsrecord": None}],
)
def test_missing_or_non_object_envelope(document):
    with pytest.raises(EnvelopeKeyMissingError) as info:
        PayloadExtractor().extract(json.dumps(document).encode(), "gpsrecord")
    assert info.value.envelope_key == "gpsrecord"


def test_deeply_nested_body_is_a_format_error():
    depth = 100_000
    body = b'{"gpsrecord": {"f": ' + b"[" * depth + b"]" * depth + b"}}"
    with pytest.raises(PayloadFormatError):
        PayloadExtractor().extract(body, "gpsrecord")
