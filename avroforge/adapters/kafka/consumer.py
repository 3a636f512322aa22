"""Kafka Batch Source – DIP adapter for BatchSource.

Consume up to batch_size messages per poll; offsets are committed by the caller
once the batch has been handled.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from confluent_kafka import Consumer

from avroforge.domain.records import RawRecord
from avroforge.ports.batch_source import BatchSource

logger = logging.getLogger(__name__)


def decode_headers(headers: Optional[Sequence[Tuple[str, Optional[bytes]]]]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for key, value in headers or ():
        if isinstance(value, bytes):
            out[key] = value.decode("utf-8", errors="replace")
        else:
            out[key] = value or ""
    return out


class KafkaBatchSource(BatchSource):
    def __init__(self, consumer: Consumer, batch_size: int, timeout_s: float) -> None:
        self._consumer = consumer
        self._batch_size = batch_size
        self._timeout_s = timeout_s

    def poll_batch(self) -> List[RawRecord]:
        batch: List[RawRecord] = []
        for msg in self._consumer.consume(num_messages=self._batch_size, timeout=self._timeout_s):
            err = msg.error()
            if err is not None:
                logger.warning(
                    "CONSUME_ERROR | topic=%s | partition=%s | error=%s", msg.topic(), msg.partition(), err
                )
                continue
            batch.append(RawRecord(body=msg.value() or b"", headers=decode_headers(msg.headers())))
        return batch

    def commit(self) -> None:
        self._consumer.commit(asynchronous=False)

    def close(self) -> None:
        self._consumer.close()
