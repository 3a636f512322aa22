"""SRP: one place to parse and hold configuration.

Keep it simple; no side effects beyond reading environment.
"""
from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Config:
    """DIP: the runner consumes Config, not raw env."""

    # Envelope / routing
    envelope_key: str = "gpsrecord"
    envelope_key_header: str = "avroforge.envelope.key"
    schema_url_header: str = "flume.avro.schema.url"
    container_codec: str = "null"

    # Kafka
    bootstrap: str = "kafka:9092"
    schema_registry: str = "http://schema-registry:8081"
    input_topic: str = "gpsrecord.raw"
    output_topic: str = "gpsrecord.avro"
    dead_letter_topic: str = ""
    group_id: str = "avroforge"

    # Batching
    batch_size: int = 500
    poll_timeout_s: float = 1.0

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            envelope_key=os.getenv("ENVELOPE_KEY", cls.envelope_key),
            envelope_key_header=os.getenv("ENVELOPE_KEY_HEADER", cls.envelope_key_header),
            schema_url_header=os.getenv("SCHEMA_URL_HEADER", cls.schema_url_header),
            container_codec=os.getenv("CONTAINER_CODEC", cls.container_codec),
            bootstrap=os.getenv("KAFKA_BOOTSTRAP", cls.bootstrap),
            schema_registry=os.getenv("SCHEMA_REGISTRY_URL", cls.schema_registry),
            input_topic=os.getenv("INPUT_TOPIC", cls.input_topic),
            output_topic=os.getenv("OUTPUT_TOPIC", cls.output_topic),
            dead_letter_topic=os.getenv("DEAD_LETTER_TOPIC", cls.dead_letter_topic),
            group_id=os.getenv("CONSUMER_GROUP", cls.group_id),
            batch_size=int(os.getenv("BATCH_SIZE", str(cls.batch_size))),
            poll_timeout_s=float(os.getenv("POLL_TIMEOUT_S", str(cls.poll_timeout_s))),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )
