"""Domain – schema tree, records and errors. No I/O lives here."""

from avroforge.domain.errors import (
    ContainerFormatError,
    EncoderStateError,
    EnvelopeKeyMissingError,
    FieldError,
    MissingFieldError,
    PayloadFormatError,
    RecordEncodingError,
    SchemaLoadError,
    TranscodeError,
    TypeCoercionError,
)
from avroforge.domain.records import RawRecord, TypedRecord
from avroforge.domain.schema import FieldKind, FieldSpec, RecordSchema, Schema, parse_schema

__all__ = [
    "ContainerFormatError",
    "EncoderStateError",
    "EnvelopeKeyMissingError",
    "FieldError",
    "FieldKind",
    "FieldSpec",
    "MissingFieldError",
    "PayloadFormatError",
    "RawRecord",
    "RecordEncodingError",
    "RecordSchema",
    "Schema",
    "SchemaLoadError",
    "TranscodeError",
    "TypeCoercionError",
    "TypedRecord",
    "parse_schema",
]
