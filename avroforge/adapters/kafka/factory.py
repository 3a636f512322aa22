"""Kafka Factory – SRP: build consumer-backed source and producer-backed publisher.

DIP: callers receive ports, not concrete libs.
"""
from __future__ import annotations

from confluent_kafka import Consumer, SerializingProducer
from confluent_kafka.serialization import StringSerializer

from avroforge.adapters.kafka.consumer import KafkaBatchSource
from avroforge.adapters.kafka.publisher import KafkaPublisher
from avroforge.config import Config


def build_kafka(config: Config):
    consumer = Consumer(
        {
            "bootstrap.servers": config.bootstrap,
            "group.id": config.group_id,
            "enable.auto.commit": False,
            "auto.offset.reset": "earliest",
        }
    )
    consumer.subscribe([config.input_topic])

    # containers can be large; one message per batch
    producer = SerializingProducer(
        {
            "bootstrap.servers": config.bootstrap,
            "enable.idempotence": True,
            "acks": "all",
            "linger.ms": 25,
            "compression.type": "lz4",
            "message.max.bytes": 10485760,
            "key.serializer": StringSerializer("utf_8"),
        }
    )

    source = KafkaBatchSource(consumer, batch_size=config.batch_size, timeout_s=config.poll_timeout_s)
    return source, KafkaPublisher(producer)
