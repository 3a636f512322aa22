"""Field Transcoder – SRP: map a payload tree onto a schema's field graph.

Each field visit yields Ok(value) or Err(error); the first Err ends the record.
Optional nested records are always materialized, empty when the payload has no
object for them. Optional scalars are simply left out.
"""
from __future__ import annotations

import math
import re
from typing import Any, Callable, Dict, Mapping, Tuple, Union

from avroforge.domain.errors import MissingFieldError, TypeCoercionError
from avroforge.domain.records import TypedRecord
from avroforge.domain.result import Err, Ok, Result
from avroforge.domain.schema import FieldKind, FieldSpec, RecordSchema, Schema

Path = Tuple[str, ...]

_INTEGER_TEXT = re.compile(r"[+-]?\d+")
_INTEGER_RANGES = {
    FieldKind.INT: (-(2**31), 2**31 - 1),
    FieldKind.LONG: (-(2**63), 2**63 - 1),
}
_FLOAT32_MAX = 3.4028234663852886e38


def _coerce_integer(value: Any, spec: FieldSpec, path: Path) -> Result:
    if isinstance(value, bool):
        return Err(TypeCoercionError(path, spec.kind.value, value))
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and _INTEGER_TEXT.fullmatch(value.strip()):
        number = int(value.strip())
    else:
        return Err(TypeCoercionError(path, spec.kind.value, value))
    low, high = _INTEGER_RANGES[spec.kind]
    if not low <= number <= high:
        return Err(TypeCoercionError(path, spec.kind.value, value))
    return Ok(number)


def _coerce_floating(value: Any, spec: FieldSpec, path: Path) -> Result:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return Err(TypeCoercionError(path, spec.kind.value, value))
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return Err(TypeCoercionError(path, spec.kind.value, value))
    if spec.kind is FieldKind.FLOAT and math.isfinite(number) and abs(number) > _FLOAT32_MAX:
        return Err(TypeCoercionError(path, spec.kind.value, value))
    return Ok(number)


def _coerce_string(value: Any, spec: FieldSpec, path: Path) -> Result:
    if isinstance(value, str):
        return Ok(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return Ok(str(value))
    if isinstance(value, float):
        return Ok(repr(value))
    return Err(TypeCoercionError(path, spec.kind.value, value))


def _coerce_boolean(value: Any, spec: FieldSpec, path: Path) -> Result:
    if isinstance(value, bool):
        return Ok(value)
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return Ok(value.lower() == "true")
    return Err(TypeCoercionError(path, spec.kind.value, value))


def _coerce_enum(value: Any, spec: FieldSpec, path: Path) -> Result:
    if isinstance(value, str) and value in spec.symbols:
        return Ok(value)
    return Err(TypeCoercionError(path, f"enum {list(spec.symbols)}", value))


_COERCERS: Dict[FieldKind, Callable[[Any, FieldSpec, Path], Result]] = {
    FieldKind.INT: _coerce_integer,
    FieldKind.LONG: _coerce_integer,
    FieldKind.FLOAT: _coerce_floating,
    FieldKind.DOUBLE: _coerce_floating,
    FieldKind.STRING: _coerce_string,
    FieldKind.BOOLEAN: _coerce_boolean,
    FieldKind.ENUM: _coerce_enum,
}


class FieldTranscoder:
    """Walks the schema, not the payload: unknown payload keys are ignored."""

    def transcode(self, payload: Mapping[str, Any], schema: Union[Schema, RecordSchema]) -> TypedRecord:
        root = schema.root if isinstance(schema, Schema) else schema
        result = self.visit_record(payload, root, ())
        if isinstance(result, Err):
            raise result.error
        return result.value

    def visit_record(self, node: Mapping[str, Any], record: RecordSchema, path: Path) -> Result:
        values: Dict[str, Any] = {}
        for spec in record.fields:
            field_path = path + (spec.name,)
            # JSON null counts as absent
            value = node.get(spec.name)
            if spec.is_record:
                result = self.visit_nested(value, spec, field_path)
            elif value is None:
                if spec.required:
                    return Err(MissingFieldError(field_path))
                continue
            else:
                result = self.visit_scalar(value, spec, field_path)
            if isinstance(result, Err):
                return result
            values[spec.name] = result.value
        return Ok(TypedRecord(record, values))

    def visit_nested(self, value: Any, spec: FieldSpec, path: Path) -> Result:
        if value is None:
            if spec.required:
                return Err(MissingFieldError(path))
            return Ok(TypedRecord(spec.record, {}))
        if not isinstance(value, Mapping):
            return Err(TypeCoercionError(path, f"record {spec.record.fullname}", value))
        return self.visit_record(value, spec.record, path)

    def visit_scalar(self, value: Any, spec: FieldSpec, path: Path) -> Result:
        return _COERCERS[spec.kind](value, spec, path)
