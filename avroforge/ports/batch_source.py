"""DIP Port – BatchSource.

Deliver raw records in batches; acknowledge them once handled.
"""
from typing import List

from avroforge.domain.records import RawRecord


class BatchSource:
    def poll_batch(self) -> List[RawRecord]:  # pragma: no cover - interface only
        raise NotImplementedError

    def commit(self) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    def close(self) -> None:  # pragma: no cover - interface only
        raise NotImplementedError
