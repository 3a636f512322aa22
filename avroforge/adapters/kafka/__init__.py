from avroforge.adapters.kafka.consumer import KafkaBatchSource
from avroforge.adapters.kafka.publisher import KafkaPublisher

__all__ = ["KafkaBatchSource", "KafkaPublisher"]
