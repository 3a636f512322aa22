"""DIP Port – EventPublisher.

Where collapsed containers (and dead letters) go. The infrastructure implements.
"""
from typing import Dict, Mapping, Optional, Sequence

from avroforge.domain.errors import TranscodeError
from avroforge.domain.records import RawRecord

ERROR_HEADER = "avroforge.error"
ERROR_INDEX_HEADER = "avroforge.error.index"


def dead_letter_headers(record: RawRecord, position: int, error: TranscodeError) -> Dict[str, str]:
    """Original headers plus the failure reason; the offending record also gets its index."""

    headers = dict(record.headers)
    headers[ERROR_HEADER] = f"{type(error).__name__}: {error}"
    if error.record_index is not None and error.record_index == position:
        headers[ERROR_INDEX_HEADER] = str(position)
    return headers


class EventPublisher:
    """ISP: a narrow interface sufficient for the runner.

    publish: send an encoded message with headers to a topic.
    publish_dead_letter: send a failed batch's raw records, annotated with the error.
    """

    def publish(
        self,
        topic: str,
        key: Optional[str],
        value: bytes,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    def publish_dead_letter(self, topic: str, batch: Sequence[RawRecord], error: TranscodeError) -> None:
        for position, record in enumerate(batch):
            self.publish(topic, key=None, value=record.body, headers=dead_letter_headers(record, position, error))

    def poll(self) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    def flush(self, timeout: float = 15.0) -> None:  # pragma: no cover - interface only
        raise NotImplementedError
