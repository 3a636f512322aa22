"""avro-forge: collapse batches of enveloped JSON records into single Avro containers."""

from avroforge.adapters.avro.container import AvroContainerEncoder, decode_container
from avroforge.domain.errors import (
    EncoderStateError,
    EnvelopeKeyMissingError,
    MissingFieldError,
    PayloadFormatError,
    SchemaLoadError,
    TranscodeError,
    TypeCoercionError,
)
from avroforge.domain.records import RawRecord, TypedRecord
from avroforge.domain.schema import Schema, parse_schema
from avroforge.services.collapser import BatchCollapser
from avroforge.services.extractor import PayloadExtractor
from avroforge.services.schema_cache import SchemaCache
from avroforge.services.transcoder import FieldTranscoder

__version__ = "0.1.0"

__all__ = [
    "AvroContainerEncoder",
    "BatchCollapser",
    "EncoderStateError",
    "EnvelopeKeyMissingError",
    "FieldTranscoder",
    "MissingFieldError",
    "PayloadExtractor",
    "PayloadFormatError",
    "RawRecord",
    "Schema",
    "SchemaCache",
    "SchemaLoadError",
    "TranscodeError",
    "TypeCoercionError",
    "TypedRecord",
    "decode_container",
    "parse_schema",
]
