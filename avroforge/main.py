"""avro-forge runner

Consumes JSON records from Kafka in batches and republishes each batch as one
Avro object container.
Architecture:
- Kafka: raw JSON events in, one container per batch out
- Schema: resolved once from the first batch's header locator (file, s3a://, registry://)
- Envelope: each JSON body carries the record under one top-level key
Failure policy:
- A batch is all or nothing; a bad record sinks the whole batch
- Failed batches go to the dead-letter topic when one is configured, then are committed

SRP: this module only wires and runs the app; logic lives in services.
DIP: relies on ports and adapters, not concrete libs.
"""
from __future__ import annotations

import logging
import signal
from typing import List, Optional

from avroforge.adapters.avro.container import AvroContainerEncoder
from avroforge.adapters.kafka.factory import build_kafka
from avroforge.adapters.schema_sources.router import build_schema_source
from avroforge.config import Config
from avroforge.domain.errors import TranscodeError
from avroforge.domain.records import RawRecord
from avroforge.ports.batch_source import BatchSource
from avroforge.ports.event_publisher import EventPublisher
from avroforge.services.collapser import BatchCollapser
from avroforge.services.interceptor import HeaderInterceptor
from avroforge.services.schema_cache import SchemaCache

logger = logging.getLogger(__name__)


def build_interceptor(cfg: Config) -> HeaderInterceptor:
    collapser = BatchCollapser(
        SchemaCache(build_schema_source(cfg)),
        AvroContainerEncoder(codec=cfg.container_codec),
    )
    return HeaderInterceptor(
        collapser,
        locator_header=cfg.schema_url_header,
        envelope_key=cfg.envelope_key,
        envelope_key_header=cfg.envelope_key_header,
    )


class App:
    """SRP: orchestrate lifecycle. No transcoding logic here."""

    def __init__(
        self,
        cfg: Config,
        source: Optional[BatchSource] = None,
        publisher: Optional[EventPublisher] = None,
        interceptor: Optional[HeaderInterceptor] = None,
    ) -> None:
        self.cfg = cfg
        self.running = True
        self.source = source
        self.publisher = publisher
        self.interceptor = interceptor

    def _setup(self) -> None:
        if self.source is None or self.publisher is None:
            logger.info("KAFKA_CONNECTING | bootstrap=%s | topic=%s", self.cfg.bootstrap, self.cfg.input_topic)
            self.source, self.publisher = build_kafka(self.cfg)
        if self.interceptor is None:
            self.interceptor = build_interceptor(self.cfg)

    def handle_batch(self, batch: List[RawRecord]) -> bool:
        """Collapse and publish one batch. Returns False when the batch produced no output."""

        try:
            out = self.interceptor.intercept(batch)
        except TranscodeError as exc:
            self._dead_letter(batch, exc)
            return False
        for unit in out:
            self.publisher.publish(self.cfg.output_topic, key=None, value=unit.body, headers=unit.headers)
        return True

    def _dead_letter(self, batch: List[RawRecord], exc: TranscodeError) -> None:
        if not self.cfg.dead_letter_topic:
            logger.warning("BATCH_DROPPED | records=%d | error=%s", len(batch), exc)
            return
        self.publisher.publish_dead_letter(self.cfg.dead_letter_topic, batch, exc)
        logger.warning(
            "BATCH_DEAD_LETTERED | records=%d | topic=%s | error=%s",
            len(batch),
            self.cfg.dead_letter_topic,
            exc,
        )

    def _loop(self) -> None:
        logger.info(
            "RUNNER_STARTED | in=%s | out=%s | batch_size=%d | envelope=%s",
            self.cfg.input_topic,
            self.cfg.output_topic,
            self.cfg.batch_size,
            self.cfg.envelope_key,
        )
        while self.running:
            batch = self.source.poll_batch()
            if batch:
                self.handle_batch(batch)
                self.source.commit()
            self.publisher.poll()

    def _teardown(self) -> None:
        logger.info("RUNNER_STOPPING | status=flushing")
        try:
            self.publisher.flush(15)
        finally:
            self.source.close()

    def run(self) -> None:
        self._setup()
        try:
            self._loop()
        finally:
            self._teardown()


def main() -> None:
    cfg = Config.from_env()
    logging.basicConfig(level=cfg.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    app = App(cfg)

    def _sig(*_):
        app.running = False
        logger.info("SHUTDOWN_SIGNAL | status=stopping_after_current_batch")

    signal.signal(signal.SIGINT, _sig)
    signal.signal(signal.SIGTERM, _sig)

    app.run()


if __name__ == "__main__":
    main()
