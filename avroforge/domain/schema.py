"""Schema Model – SRP: turn an Avro record schema into the field tree the transcoder walks.

fastavro validates the document; this module keeps only what field mapping needs:
names, kinds, optionality and nested records, in declaration order.
"""
from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from fastavro import parse_schema as parse_avro_schema
from fastavro.schema import SchemaParseException, UnknownType

from avroforge.domain.errors import SchemaLoadError


class FieldKind(str, Enum):
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    BOOLEAN = "boolean"
    ENUM = "enum"
    RECORD = "record"


_PRIMITIVES: Dict[str, FieldKind] = {
    kind.value: kind for kind in FieldKind if kind not in (FieldKind.ENUM, FieldKind.RECORD)
}


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: FieldKind
    optional: bool = False
    record: Optional["RecordSchema"] = None
    symbols: Tuple[str, ...] = ()
    has_default: bool = False

    @property
    def required(self) -> bool:
        return not self.optional

    @property
    def is_record(self) -> bool:
        return self.kind is FieldKind.RECORD


@dataclass(frozen=True, eq=False)
class RecordSchema:
    name: str
    namespace: str
    fields: Tuple[FieldSpec, ...]

    @property
    def fullname(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)


@dataclass(frozen=True, eq=False)
class Schema:
    """A resolved schema: the field tree plus the Avro document it came from.

    `definition` is the document as loaded. It is what the container writer
    receives and what ends up in the container header.
    """

    root: RecordSchema
    definition: Mapping[str, Any]

    @property
    def name(self) -> str:
        return self.root.fullname


def parse_schema(source: Union[str, bytes, Mapping[str, Any]]) -> Schema:
    """Parse an Avro record schema document into a `Schema`.

    Raises SchemaLoadError for malformed JSON, invalid Avro, a non-record top
    level, or field types the transcoder cannot map.
    """
    if isinstance(source, (str, bytes)):
        try:
            definition = json.loads(source)
        except ValueError as exc:
            raise SchemaLoadError(f"schema is not valid JSON: {exc}") from exc
    else:
        definition = copy.deepcopy(dict(source))

    if not isinstance(definition, dict) or definition.get("type") != "record":
        raise SchemaLoadError("top-level schema must be an Avro record")

    try:
        parse_avro_schema(copy.deepcopy(definition))
    except (SchemaParseException, UnknownType, ValueError, TypeError, KeyError) as exc:
        raise SchemaLoadError(f"invalid Avro schema: {exc}") from exc

    root = _TreeBuilder().record(definition, namespace="")
    return Schema(root=root, definition=definition)


class _TreeBuilder:
    def __init__(self) -> None:
        # fullname and short name -> (kind, record, symbols)
        self._named: Dict[str, Tuple[FieldKind, Optional[RecordSchema], Tuple[str, ...]]] = {}

    def record(self, definition: Mapping[str, Any], namespace: str) -> RecordSchema:
        name, namespace = _split_name(definition["name"], definition.get("namespace", namespace))
        fields = tuple(self._field(f, namespace) for f in definition.get("fields", []))
        record = RecordSchema(name=name, namespace=namespace, fields=fields)
        self._register(record.name, namespace, (FieldKind.RECORD, record, ()))
        return record

    def _field(self, definition: Mapping[str, Any], namespace: str) -> FieldSpec:
        avro_type = definition["type"]
        has_default = "default" in definition
        optional = has_default
        if isinstance(avro_type, list):
            branches = [b for b in avro_type if b != "null"]
            if len(avro_type) != 2 or len(branches) != 1:
                raise SchemaLoadError(
                    f"field {definition['name']!r}: only [\"null\", T] unions are supported"
                )
            optional = True
            avro_type = branches[0]
        kind, record, symbols = self._resolve(avro_type, namespace, definition["name"])
        return FieldSpec(
            name=definition["name"],
            kind=kind,
            optional=optional,
            record=record,
            symbols=symbols,
            has_default=has_default,
        )

    def _resolve(self, avro_type: Any, namespace: str, field_name: str):
        if isinstance(avro_type, str):
            if avro_type in _PRIMITIVES:
                return _PRIMITIVES[avro_type], None, ()
            qualified = f"{namespace}.{avro_type}" if namespace and "." not in avro_type else avro_type
            for candidate in (qualified, avro_type):
                if candidate in self._named:
                    return self._named[candidate]
            raise SchemaLoadError(f"field {field_name!r}: unknown type {avro_type!r}")

        if isinstance(avro_type, dict):
            inner = avro_type.get("type")
            if inner == "record":
                return FieldKind.RECORD, self.record(avro_type, namespace), ()
            if inner == "enum":
                name, enum_ns = _split_name(avro_type["name"], avro_type.get("namespace", namespace))
                entry = (FieldKind.ENUM, None, tuple(avro_type["symbols"]))
                self._register(name, enum_ns, entry)
                return entry
            if isinstance(inner, str) and inner in _PRIMITIVES:
                # logical types ride on their underlying primitive
                return _PRIMITIVES[inner], None, ()

        raise SchemaLoadError(f"field {field_name!r}: unsupported Avro type {avro_type!r}")

    def _register(self, name: str, namespace: str, entry) -> None:
        self._named[name] = entry
        if namespace:
            self._named[f"{namespace}.{name}"] = entry


def _split_name(name: str, namespace: Optional[str]) -> Tuple[str, str]:
    if "." in name:
        namespace, _, name = name.rpartition(".")
    return name, namespace or ""
