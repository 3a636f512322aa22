import copy

import pytest

from avroforge.adapters.avro.container import decode_container
from avroforge.adapters.schema_sources.file import FileSchemaSource
from avroforge.domain.errors import (
    EnvelopeKeyMissingError,
    MissingFieldError,
    PayloadFormatError,
    SchemaLoadError,
    TypeCoercionError,
)
from avroforge.domain.records import RawRecord
from avroforge.services.collapser import BatchCollapser
from avroforge.services.schema_cache import SchemaCache
from avroforge.services.transcoder import FieldTranscoder


class SpyEncoder:
    """Wraps a real encoder and records lifecycle calls."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = []

    def open(self, schema):
        self.calls.append("open")
        return self.inner.open(schema)

    def append(self, handle, record):
        self.calls.append("append")
        self.inner.append(handle, record)

    def finish(self, handle):
        self.calls.append("finish")
        return self.inner.finish(handle)

    def discard(self, handle):
        self.calls.append("discard")
        self.inner.discard(handle)


def _batch(make_raw, gps_payload, n):
    out = []
    for i in range(n):
        payload = copy.deepcopy(gps_payload)
        payload["accessid"] = 100 + i
        out.append(make_raw(payload, headers={"seq": str(i)}))
    return out


def test_three_records_become_one_container(collapser, make_raw, gps_payload, gps_schema_path):
    batch = _batch(make_raw, gps_payload, 3)

    out = collapser.collapse(batch, str(gps_schema_path), "gpsrecord")

    assert len(out) == 1
    decoded = decode_container(out[0].body)
    assert decoded.schema["name"] == "avroforge.gps.gpsrecord"
    assert [r["accessid"] for r in decoded.records] == [100, 101, 102]


def test_decoded_records_equal_transcoded_ones(collapser, make_raw, gps_payload, gps_schema_path, gps_schema):
    batch = _batch(make_raw, gps_payload, 3)
    out = collapser.collapse(batch, str(gps_schema_path), "gpsrecord")

    transcoder = FieldTranscoder()
    for raw, decoded in zip(batch, decode_container(out[0].body).records):
        expected = transcoder.transcode(collapser.extractor.extract(raw.body, "gpsrecord"), gps_schema)
        assert decoded["accessid"] == expected["accessid"]
        assert decoded["position"]["latitude"] == expected["position"]["latitude"]
        assert decoded["time"]["capture"] == expected["time"]["capture"]
        assert decoded["sassite"] == expected["sassite"]


def test_output_carries_first_record_headers_only(collapser, make_raw, gps_payload, gps_schema_path):
    batch = _batch(make_raw, gps_payload, 2)
    [unit] = collapser.collapse(batch, str(gps_schema_path), "gpsrecord")
    assert unit.headers["seq"] == "0"
    assert unit.headers is not batch[0].headers


def test_input_batch_is_not_mutated(collapser, make_raw, gps_payload, gps_schema_path):
    batch = _batch(make_raw, gps_payload, 2)
    snapshot = list(batch)
    collapser.collapse(batch, str(gps_schema_path), "gpsrecord")
    assert batch == snapshot


def test_empty_batch_is_a_no_op(collapser):
    assert collapser.collapse([], "", "gpsrecord") == []
    assert not collapser.schema_cache.resolved


def test_missing_required_field_aborts_whole_batch(encoder, make_raw, gps_payload, gps_schema_path):
    spy = SpyEncoder(encoder)
    collapser = BatchCollapser(SchemaCache(FileSchemaSource()), spy)
    batch = _batch(make_raw, gps_payload, 3)
    broken = copy.deepcopy(gps_payload)
    del broken["satelliteid"]
    batch[1] = make_raw(broken)

    with pytest.raises(MissingFieldError) as info:
        collapser.collapse(batch, str(gps_schema_path), "gpsrecord")

    assert info.value.record_index == 1
    assert spy.calls == ["open", "append", "discard"]


@pytest.mark.parametrize(
    "raw, error",
    [
        (RawRecord(body=b"{not json"), PayloadFormatError),
        (RawRecord(body=b'{"other": {}}'), EnvelopeKeyMissingError),
        (RawRecord(body=b'{"gpsrecord": {"accessid": "x"}}'), TypeCoercionError),
    ],
)
def test_any_record_error_aborts(collapser, make_raw, gps_payload, gps_schema_path, raw, error):
    batch = [make_raw(gps_payload), raw]
    with pytest.raises(error):
        collapser.collapse(batch, str(gps_schema_path), "gpsrecord")


def test_schema_failure_then_recovery(collapser, make_raw, gps_payload, gps_schema_path, tmp_path):
    batch = _batch(make_raw, gps_payload, 1)
    with pytest.raises(SchemaLoadError):
        collapser.collapse(batch, str(tmp_path / "nope.avsc"), "gpsrecord")

    out = collapser.collapse(batch, str(gps_schema_path), "gpsrecord")
    assert len(decode_container(out[0].body).records) == 1


def test_later_batches_ignore_their_locator(collapser, make_raw, gps_payload, gps_schema_path, tmp_path):
    collapser.collapse(_batch(make_raw, gps_payload, 1), str(gps_schema_path), "gpsrecord")
    out = collapser.collapse(_batch(make_raw, gps_payload, 2), str(tmp_path / "other.avsc"), "gpsrecord")
    assert len(decode_container(out[0].body).records) == 2
