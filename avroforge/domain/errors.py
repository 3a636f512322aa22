"""Errors – SRP: one hierarchy for everything that can sink a batch.

Every kind aborts the whole batch; callers decide the disposition.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence


class TranscodeError(Exception):
    """Base for all failures raised while collapsing a batch."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.record_index: Optional[int] = None


class SchemaLoadError(TranscodeError):
    """Schema source unreachable or its content is not a usable Avro record schema."""


class PayloadFormatError(TranscodeError):
    """Record body is not a JSON object."""


class EnvelopeKeyMissingError(TranscodeError):
    def __init__(self, envelope_key: str) -> None:
        super().__init__(f"envelope key {envelope_key!r} missing or not an object")
        self.envelope_key = envelope_key


class FieldError(TranscodeError):
    """A field-level failure; `path` is the dotted route from the record root."""

    def __init__(self, path: Sequence[str], message: str) -> None:
        self.path = ".".join(path)
        super().__init__(f"{self.path}: {message}")


class MissingFieldError(FieldError):
    def __init__(self, path: Sequence[str]) -> None:
        super().__init__(path, "required field is absent")


class TypeCoercionError(FieldError):
    def __init__(self, path: Sequence[str], expected: str, value: Any) -> None:
        super().__init__(path, f"cannot coerce {value!r} to {expected}")
        self.expected = expected
        self.value = value


class EncoderStateError(TranscodeError):
    """Container writer used outside its open → append* → finish lifecycle."""


class RecordEncodingError(TranscodeError):
    """The Avro writer rejected a typed record."""


class ContainerFormatError(TranscodeError):
    """Bytes are not a readable Avro object container."""
