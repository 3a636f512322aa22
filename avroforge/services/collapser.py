"""Batch Collapser – SRP: N raw records in, one container record out.

Pure over its inputs: the caller's batch is never mutated, a new list is returned.
All or nothing: the first failing record sinks the batch.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from avroforge.domain.errors import TranscodeError
from avroforge.domain.records import RawRecord
from avroforge.ports.container_encoder import ContainerEncoder
from avroforge.services.extractor import PayloadExtractor
from avroforge.services.schema_cache import SchemaCache
from avroforge.services.transcoder import FieldTranscoder

logger = logging.getLogger(__name__)


class BatchCollapser:
    """DIP: cache and encoder are injected; extractor and transcoder default to the stock ones."""

    def __init__(
        self,
        schema_cache: SchemaCache,
        encoder: ContainerEncoder,
        extractor: Optional[PayloadExtractor] = None,
        transcoder: Optional[FieldTranscoder] = None,
    ) -> None:
        self.schema_cache = schema_cache
        self.encoder = encoder
        self.extractor = extractor or PayloadExtractor()
        self.transcoder = transcoder or FieldTranscoder()

    def collapse(self, batch: Sequence[RawRecord], locator: str, envelope_key: str) -> List[RawRecord]:
        """Encode every record of `batch` into one container.

        Returns [] for an empty batch, otherwise a single RawRecord carrying the
        first input's headers and the container bytes. Raises the first
        TranscodeError met, tagged with the failing record's index.
        """
        if not batch:
            logger.debug("BATCH_EMPTY | envelope=%s | status=skipped", envelope_key)
            return []

        schema = self.schema_cache.resolve(locator)
        handle = self.encoder.open(schema)
        index = 0
        try:
            for index, raw in enumerate(batch):
                payload = self.extractor.extract(raw.body, envelope_key)
                record = self.transcoder.transcode(payload, schema)
                self.encoder.append(handle, record)
        except TranscodeError as exc:
            self.encoder.discard(handle)
            exc.record_index = index
            logger.error(
                "BATCH_FAILED | schema=%s | records=%d | failed_index=%d | error=%s: %s",
                schema.name,
                len(batch),
                index,
                type(exc).__name__,
                exc,
            )
            raise

        data = self.encoder.finish(handle)
        logger.info(
            "BATCH_COLLAPSED | schema=%s | records=%d | bytes=%d",
            schema.name,
            len(batch),
            len(data),
        )
        carrier = batch[0]
        return [RawRecord(body=data, headers=dict(carrier.headers))]
