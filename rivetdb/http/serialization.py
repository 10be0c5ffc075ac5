"""Conversion of columnar values to JSON-ready Python values."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Sequence
from zoneinfo import ZoneInfo


class DataType(Enum):
    """Logical types of a column."""

    NULL = "null"
    BOOLEAN = "boolean"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    UTF8 = "utf8"
    LARGE_UTF8 = "large_utf8"
    BINARY = "binary"
    LARGE_BINARY = "large_binary"
    DATE32 = "date32"
    DATE64 = "date64"
    TIMESTAMP = "timestamp"
    DECIMAL128 = "decimal128"


class TimeUnit(Enum):
    """Resolution of a timestamp; the value is nanoseconds per unit."""

    SECOND = 1_000_000_000
    MILLISECOND = 1_000_000
    MICROSECOND = 1_000
    NANOSECOND = 1


@dataclass(frozen=True)
class Field:
    """A named, typed column."""

    name: str
    data_type: DataType
    nullable: bool = True
    time_unit: TimeUnit | None = None
    timezone: str | None = None
    precision: int | None = None
    scale: int | None = None

    def __post_init__(self) -> None:
        if self.data_type is DataType.TIMESTAMP and self.time_unit is None:
            raise ValueError(f"timestamp field {self.name!r} needs a time unit")
        if self.data_type is DataType.DECIMAL128 and (
            self.precision is None or self.scale is None
        ):
            raise ValueError(f"decimal field {self.name!r} needs precision and scale")


_EPOCH_DATE = date(1970, 1, 1)
_EPOCH = datetime(1970, 1, 1)
_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")
_NANOS_PER_SECOND = 1_000_000_000


def _parse_timezone(name: str) -> tzinfo:
    match = _OFFSET_RE.match(name)
    if match:
        sign, hours, minutes = match.groups()
        delta = timedelta(hours=int(hours), minutes=int(minutes))
        return timezone(-delta if sign == "-" else delta)
    return ZoneInfo(name)


def _fraction(nanos: int) -> str:
    if nanos == 0:
        return ""
    if nanos % 1_000_000 == 0:
        return f".{nanos // 1_000_000:03d}"
    if nanos % 1_000 == 0:
        return f".{nanos // 1_000:06d}"
    return f".{nanos:09d}"


def _format_offset(moment: datetime) -> str:
    offset = moment.utcoffset() or timedelta(0)
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total) // 60, 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def _datetime_text(total_nanos: int, tz: tzinfo | None) -> str:
    seconds, nanos = divmod(total_nanos, _NANOS_PER_SECOND)
    moment = _EPOCH + timedelta(seconds=seconds)
    if tz is None:
        return moment.strftime("%Y-%m-%dT%H:%M:%S") + _fraction(nanos)
    local = moment.replace(tzinfo=timezone.utc).astimezone(tz)
    return local.strftime("%Y-%m-%dT%H:%M:%S") + _fraction(nanos) + _format_offset(local)


def _float_value(value: Any) -> float | None:
    number = float(value)
    return number if math.isfinite(number) else None


def _decimal_converter(scale: int) -> Callable[[Any], Any]:
    def convert(value: Any) -> Any:
        if scale <= 0:
            return int(value) * 10 ** (-scale)
        return float(Decimal(int(value)).scaleb(-scale))

    return convert


def _timestamp_converter(field: Field) -> Callable[[Any], str]:
    assert field.time_unit is not None
    factor = field.time_unit.value
    tz = _parse_timezone(field.timezone) if field.timezone else None
    return lambda value: _datetime_text(int(value) * factor, tz)


_INTEGER_TYPES = {
    DataType.INT8, DataType.INT16, DataType.INT32, DataType.INT64,
    DataType.UINT8, DataType.UINT16, DataType.UINT32, DataType.UINT64,
}


def _converter(field: Field) -> Callable[[Any], Any]:
    kind = field.data_type
    if kind in _INTEGER_TYPES:
        return int
    if kind in (DataType.FLOAT32, DataType.FLOAT64):
        return _float_value
    if kind is DataType.BOOLEAN:
        return bool
    if kind in (DataType.UTF8, DataType.LARGE_UTF8):
        return str
    if kind in (DataType.BINARY, DataType.LARGE_BINARY):
        return lambda value: bytes(value).hex()
    if kind is DataType.DATE32:
        return lambda value: (_EPOCH_DATE + timedelta(days=int(value))).isoformat()
    if kind is DataType.DATE64:
        return lambda value: _datetime_text(int(value) * 1_000_000, None)
    if kind is DataType.TIMESTAMP:
        return _timestamp_converter(field)
    if kind is DataType.DECIMAL128:
        assert field.scale is not None
        return _decimal_converter(field.scale)
    if kind is DataType.NULL:
        return lambda value: None
    raise ValueError(f"unsupported data type: {kind}")


class ArrayEncoder:
    """Turns the values of one column into JSON-ready values, row by row."""

    def __init__(self, array: Sequence[Any], field: Field) -> None:
        self._values = tuple(array)
        self.field = field
        self._convert = _converter(field)

    def __len__(self) -> int:
        return len(self._values)

    def is_null(self, row_idx: int) -> bool:
        return self.field.data_type is DataType.NULL or self._values[row_idx] is None

    def encode(self, row_idx: int) -> Any:
        value = self._values[row_idx]
        if value is None:
            return None
        return self._convert(value)


def make_array_encoder(array: Sequence[Any], field: Field) -> ArrayEncoder:
    """Create an encoder for a column of values described by ``field``."""
    return ArrayEncoder(array, field)


def encode_value_at(encoder: ArrayEncoder, row_idx: int) -> Any:
    """The JSON value of one row, ``None`` for nulls."""
    if encoder.is_null(row_idx):
        return None
    return encoder.encode(row_idx)