import json

import pytest

from avroforge.domain.errors import SchemaLoadError
from avroforge.domain.schema import FieldKind, parse_schema


def test_gps_schema_tree(gps_schema):
    root = gps_schema.root
    assert gps_schema.name == "avroforge.gps.gpsrecord"
    assert root.field_names[:4] == ("accessclass", "accessid", "accessnetwork", "beamid")

    assert root.field("accessclass").optional
    assert root.field("accessid").kind is FieldKind.LONG
    assert root.field("accessid").required

    options = root.field("options")
    assert options.is_record and options.optional
    assert options.record.field_names == ("elevationband",)

    position = root.field("position")
    assert position.is_record and position.required
    assert position.record.field("latitude").record.field("position").kind is FieldKind.DOUBLE
    assert position.record.field("quality").optional


def test_parse_accepts_mapping_and_does_not_keep_caller_dict():
    definition = {"type": "record", "name": "r", "fields": [{"name": "a", "type": "int"}]}
    schema = parse_schema(definition)
    definition["fields"].append({"name": "b", "type": "int"})
    assert schema.root.field_names == ("a",)


def test_logical_enum_and_named_reference():
    schema = parse_schema(
        {
            "type": "record",
            "name": "Event",
            "namespace": "demo",
            "fields": [
                {"name": "ts", "type": {"type": "long", "logicalType": "timestamp-millis"}},
                {"name": "status", "type": {"type": "enum", "name": "Status", "symbols": ["OK", "KO"]}},
                {"name": "origin", "type": {"type": "record", "name": "Point", "fields": [{"name": "x", "type": "double"}]}},
                {"name": "target", "type": ["null", "Point"], "default": None},
                {"name": "flag", "type": "boolean", "default": False},
            ],
        }
    )
    root = schema.root
    assert root.field("ts").kind is FieldKind.LONG
    assert root.field("status").symbols == ("OK", "KO")
    assert root.field("target").record is root.field("origin").record
    assert root.field("flag").optional and root.field("flag").has_default


@pytest.mark.parametrize(
    "text",
    [
        "",
        "{not json",
        json.dumps({"type": "string"}),
        json.dumps({"type": "record", "fields": []}),
        json.dumps({"type": "record", "name": "r", "fields": [{"name": "a", "type": "nope"}]}),
        json.dumps({"type": "record", "name": "r", "fields": [{"name": "a", "type": ["int", "string"]}]}),
        json.dumps({"type": "record", "name": "r", "fields": [{"name": "a", "type": {"type": "array", "items": "int"}}]}),
    ],
)
def test_invalid_schemas_raise_schema_load_error(text):
    with pytest.raises(SchemaLoadError):
        parse_schema(text)
