"""Tagged results for field visits: Ok(value) or Err(error)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from avroforge.domain.errors import TranscodeError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: TranscodeError


Result = Union[Ok[Any], Err]
