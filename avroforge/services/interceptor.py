"""Header Interceptor – SRP: read batch routing from headers, delegate to the collapser.

The schema locator (and optionally the envelope key) travel in the first
record's headers, stamped there upstream.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from avroforge.domain.records import RawRecord
from avroforge.services.collapser import BatchCollapser


class HeaderInterceptor:
    def __init__(
        self,
        collapser: BatchCollapser,
        locator_header: str,
        envelope_key: str,
        envelope_key_header: Optional[str] = None,
    ) -> None:
        self.collapser = collapser
        self.locator_header = locator_header
        self.envelope_key = envelope_key
        self.envelope_key_header = envelope_key_header

    def intercept(self, batch: Sequence[RawRecord]) -> List[RawRecord]:
        if not batch:
            return []
        first = batch[0]
        locator = first.header(self.locator_header)
        envelope_key = self.envelope_key
        if self.envelope_key_header:
            envelope_key = first.header(self.envelope_key_header) or envelope_key
        return self.collapser.collapse(batch, locator, envelope_key)
