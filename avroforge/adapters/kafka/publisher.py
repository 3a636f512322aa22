"""Kafka Publisher – DIP adapter for EventPublisher.

Produces containers and dead letters through one SerializingProducer. Header
values go out as UTF-8 bytes; a full local queue is drained and retried.
"""
from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence, Tuple

from confluent_kafka import SerializingProducer

from avroforge.domain.errors import TranscodeError
from avroforge.domain.records import RawRecord
from avroforge.ports.event_publisher import EventPublisher, dead_letter_headers

logger = logging.getLogger(__name__)

BACKPRESSURE_POLL_S = 0.05


def encode_headers(headers: Optional[Mapping[str, str]]) -> List[Tuple[str, bytes]]:
    return [(name, value.encode("utf-8")) for name, value in (headers or {}).items()]


class KafkaPublisher(EventPublisher):
    """SRP: only concern is delivery to Kafka.

    Delivery failures are logged from the producer callback and counted in
    `failed_deliveries`.
    """

    def __init__(self, producer: SerializingProducer) -> None:
        self._producer = producer
        self.failed_deliveries = 0

    def _on_delivery(self, err, msg) -> None:
        if err is None:
            return
        self.failed_deliveries += 1
        logger.error("DELIVERY_FAILED | topic=%s | error=%s", msg.topic() if msg is not None else None, err)

    def _produce(self, topic: str, key: Optional[str], value: bytes, headers: List[Tuple[str, bytes]]) -> None:
        retries = 0
        while True:
            try:
                self._producer.produce(
                    topic=topic, key=key, value=value, headers=headers, on_delivery=self._on_delivery
                )
                break
            except BufferError:
                retries += 1
                self._producer.poll(BACKPRESSURE_POLL_S)
        if retries:
            logger.warning("PRODUCE_BACKPRESSURE | topic=%s | retries=%d", topic, retries)

    def publish(
        self,
        topic: str,
        key: Optional[str],
        value: bytes,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._produce(topic, key, value, encode_headers(headers))

    def publish_dead_letter(self, topic: str, batch: Sequence[RawRecord], error: TranscodeError) -> None:
        for position, record in enumerate(batch):
            self._produce(topic, None, record.body, encode_headers(dead_letter_headers(record, position, error)))
        # push dead letters out before the runner commits past them
        self._producer.poll(0)

    def poll(self) -> None:
        self._producer.poll(0)

    def flush(self, timeout: float = 15.0) -> None:
        remaining = self._producer.flush(timeout)
        if remaining:
            logger.warning("FLUSH_INCOMPLETE | pending=%s", remaining)
