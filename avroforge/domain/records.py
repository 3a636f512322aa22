"""Records – raw units in and out of a batch, and the typed record in between."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping

from avroforge.domain.schema import RecordSchema


@dataclass(frozen=True)
class RawRecord:
    """One transport unit: string headers plus an opaque body."""

    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)

    def header(self, key: str, default: str = "") -> str:
        return self.headers.get(key, default)


class TypedRecord(Mapping[str, Any]):
    """Read-only field-name → value mapping conforming to one RecordSchema node.

    Unset fields are absent from the mapping. Nested record fields hold
    TypedRecords.
    """

    __slots__ = ("_schema", "_values")

    def __init__(self, schema: RecordSchema, values: Mapping[str, Any]) -> None:
        self._schema = schema
        self._values = MappingProxyType(dict(values))

    @property
    def schema(self) -> RecordSchema:
        return self._schema

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TypedRecord):
            return self._schema.fullname == other._schema.fullname and dict(self._values) == dict(other._values)
        if isinstance(other, Mapping):
            return dict(self._values) == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TypedRecord({self._schema.fullname}, {dict(self._values)!r})"

    def is_empty(self) -> bool:
        return not self._values

    def to_datum(self) -> Dict[str, Any]:
        """Plain nested dicts in schema declaration order, as the Avro writer expects."""
        datum: Dict[str, Any] = {}
        for spec in self._schema.fields:
            if spec.name not in self._values:
                continue
            value = self._values[spec.name]
            datum[spec.name] = value.to_datum() if isinstance(value, TypedRecord) else value
        return datum
