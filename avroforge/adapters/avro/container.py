"""Avro Container – DIP adapter for ContainerEncoder.

One object container per batch: schema once in the header, records in blocks
behind it. Decoding lives here too so round trips stay in one place.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from fastavro import reader as avro_reader
from fastavro.schema import SchemaParseException, UnknownType
from fastavro.validation import ValidationError
from fastavro.write import Writer

from avroforge.domain.errors import ContainerFormatError, EncoderStateError, RecordEncodingError
from avroforge.domain.records import TypedRecord
from avroforge.domain.schema import Schema
from avroforge.ports.container_encoder import ContainerEncoder

logger = logging.getLogger(__name__)


@dataclass
class AvroWriterHandle:
    schema: Schema
    buffer: io.BytesIO
    writer: Writer
    records: int = 0
    released: bool = False


@dataclass(frozen=True)
class DecodedContainer:
    schema: Dict[str, Any]
    records: List[Dict[str, Any]]
    metadata: Dict[str, Any] = field(default_factory=dict)


class AvroContainerEncoder(ContainerEncoder):
    """SRP: write typed records into an in-memory Avro object container.

    - codec: "null" or "deflate" (anything else fastavro knows about)
    - sync_marker: fixed 16-byte marker for reproducible output; random if unset
    - metadata: extra user metadata stored in the header
    """

    def __init__(
        self,
        codec: str = "null",
        sync_marker: Optional[bytes] = None,
        metadata: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._codec = codec
        self._sync_marker = sync_marker
        self._metadata = dict(metadata or {})

    def open(self, schema: Schema) -> AvroWriterHandle:
        buffer = io.BytesIO()
        options: Dict[str, Any] = {}
        if self._sync_marker:
            options["sync_marker"] = self._sync_marker
        try:
            writer = Writer(
                buffer,
                dict(schema.definition),
                codec=self._codec,
                metadata=dict(self._metadata),
                validator=True,
                **options,
            )
        except ValueError as exc:
            raise EncoderStateError(f"cannot open container: {exc}") from exc
        return AvroWriterHandle(schema=schema, buffer=buffer, writer=writer)

    def append(self, handle: AvroWriterHandle, record: TypedRecord) -> None:
        self._check_open(handle, "append")
        if record.schema is not handle.schema.root:
            raise EncoderStateError(
                f"record of {record.schema.fullname} does not belong to container of {handle.schema.name}"
            )
        try:
            handle.writer.write(record.to_datum())
        except (ValidationError, ValueError, TypeError) as exc:
            raise RecordEncodingError(f"record {handle.records} rejected by Avro writer: {exc}") from exc
        handle.records += 1

    def finish(self, handle: AvroWriterHandle) -> bytes:
        self._check_open(handle, "finish")
        handle.writer.flush()
        data = handle.buffer.getvalue()
        self._release(handle)
        logger.debug("CONTAINER_FINISHED | records=%d | bytes=%d | codec=%s", handle.records, len(data), self._codec)
        return data

    def discard(self, handle: AvroWriterHandle) -> None:
        if not handle.released:
            self._release(handle)

    @staticmethod
    def _check_open(handle: AvroWriterHandle, operation: str) -> None:
        if handle.released:
            raise EncoderStateError(f"cannot {operation}: container already finished or discarded")

    @staticmethod
    def _release(handle: AvroWriterHandle) -> None:
        handle.released = True
        handle.buffer.close()


def decode_container(data: bytes) -> DecodedContainer:
    """Read an Avro object container back into its writer schema and records."""

    try:
        container = avro_reader(io.BytesIO(data))
        records = list(container)
    except (ValueError, EOFError, KeyError, SchemaParseException, UnknownType) as exc:
        raise ContainerFormatError(f"not a readable Avro container: {exc}") from exc
    return DecodedContainer(
        schema=container.writer_schema,
        records=records,
        metadata=dict(container.metadata),
    )
