"""DIP Port – ContainerEncoder.

Decouple the collapser from Avro specifics: open a container for a schema,
append typed records, finish into bytes.
"""
from typing import Any

from avroforge.domain.records import TypedRecord
from avroforge.domain.schema import Schema


class ContainerEncoder:
    """ISP: the container lifecycle, nothing more.

    open → append* → finish | discard. Any call on a released handle raises
    EncoderStateError.
    """

    def open(self, schema: Schema) -> Any:  # pragma: no cover - interface only
        raise NotImplementedError

    def append(self, handle: Any, record: TypedRecord) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    def finish(self, handle: Any) -> bytes:  # pragma: no cover - interface only
        raise NotImplementedError

    def discard(self, handle: Any) -> None:  # pragma: no cover - interface only
        raise NotImplementedError
