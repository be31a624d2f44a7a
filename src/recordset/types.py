"""
Decode kinds and decode targets for materializing cursor rows.

This module provides:
- DecodeKind: the closed set of decode kinds a column can resolve to
- Decode targets: nullable scanners, one per kind, plus a raw fallback
- ZERO_VALUES: the value a NULL cell collapses to for each kind
- Column: column metadata derived from a cursor
"""
import datetime
import decimal
import enum
import math
import uuid
from typing import Any, Self

import dateutil.parser

from recordset.exceptions import TypeConversionError


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

TRUE_STRINGS: set[str] = {'1', 't', 'T', 'TRUE', 'true', 'True'}
FALSE_STRINGS: set[str] = {'0', 'f', 'F', 'FALSE', 'false', 'False'}


class DecodeKind(enum.Enum):
    """Decode kind selected for a column from its declared type name.
    """
    STRING = 'string'
    BOOL = 'bool'
    INT64 = 'int64'
    FLOAT64 = 'float64'
    TIMESTAMP = 'timestamp'
    RAW = 'raw'

    @classmethod
    def from_name(cls, name: 'str | DecodeKind') -> 'DecodeKind':
        """Look up a kind by member name or value, case-insensitively.
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip()
        for kind in cls:
            if key.lower() in {kind.name.lower(), kind.value}:
                return kind
        raise ValueError(f'Unknown decode kind: {name!r}')


ZERO_VALUES: dict[DecodeKind, Any] = {
    DecodeKind.STRING: '',
    DecodeKind.BOOL: False,
    DecodeKind.INT64: 0,
    DecodeKind.FLOAT64: 0.0,
    DecodeKind.TIMESTAMP: datetime.datetime.min,
    DecodeKind.RAW: None,
}


def _as_text(value: Any) -> str | None:
    """Return str/bytes-like values as text, anything else as None."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        try:
            return bytes(value).decode()
        except UnicodeDecodeError as exc:
            raise TypeConversionError(f'cannot decode {len(value)} bytes as text') from exc
    return None


# Conversion functions - raw driver value -> concrete Python value

def to_string(value: Any) -> str:
    text = _as_text(value)
    if text is not None:
        return text
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, (bool, int, float, decimal.Decimal, uuid.UUID)):
        return str(value)
    raise TypeConversionError(f'cannot convert {type(value).__name__} to string')


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in {0, 1}:
        return bool(value)
    text = _as_text(value)
    if text in TRUE_STRINGS:
        return True
    if text in FALSE_STRINGS:
        return False
    raise TypeConversionError(f'cannot convert {value!r} to bool')


def to_int64(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeConversionError(f'cannot convert {value!r} to int64')
    if isinstance(value, int):
        result = value
    elif isinstance(value, (float, decimal.Decimal)):
        finite = value.is_finite() if isinstance(value, decimal.Decimal) else math.isfinite(value)
        if not finite:
            raise TypeConversionError(f'cannot convert {value!r} to int64')
        if value != int(value):
            raise TypeConversionError(f'cannot convert {value!r} to int64: not integral')
        result = int(value)
    else:
        text = _as_text(value)
        if text is None:
            raise TypeConversionError(f'cannot convert {type(value).__name__} to int64')
        try:
            result = int(text.strip(), 10)
        except ValueError as exc:
            raise TypeConversionError(f'cannot convert {text!r} to int64') from exc
    if not INT64_MIN <= result <= INT64_MAX:
        raise TypeConversionError(f'value {result} out of int64 range')
    return result


def to_float64(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeConversionError(f'cannot convert {value!r} to float64')
    if isinstance(value, (int, float, decimal.Decimal)):
        try:
            return float(value)
        except OverflowError as exc:
            raise TypeConversionError(f'{type(value).__name__} value out of float64 range') from exc
    text = _as_text(value)
    if text is None:
        raise TypeConversionError(f'cannot convert {type(value).__name__} to float64')
    try:
        return float(text.strip())
    except (ValueError, OverflowError) as exc:
        raise TypeConversionError(f'cannot convert {text!r} to float64') from exc


def to_timestamp(value: Any) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time())
    text = _as_text(value)
    if text is None:
        raise TypeConversionError(f'cannot convert {type(value).__name__} to timestamp')
    try:
        return dateutil.parser.isoparse(text.strip())
    except ValueError as exc:
        raise TypeConversionError(f'cannot convert {text!r} to timestamp') from exc


# Decode targets

class DecodeTarget:
    """Base class for decode targets.

    A target receives one raw driver value per row through `scan` and
    exposes the decoded result through `value`.
    """

    kind: DecodeKind = DecodeKind.RAW

    def __init__(self) -> None:
        self.value: Any = None

    def scan(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f'{type(self).__name__}(value={self.value!r})'


class RawTarget(DecodeTarget):
    """Untyped target: stores whatever the driver returned, including None."""


class NullableTarget(DecodeTarget):
    """Target that distinguishes a present value from SQL NULL.

    `valid` is False after scanning None; `value` then holds the zero
    value of the target's kind.
    """

    convert = None

    def __init__(self) -> None:
        super().__init__()
        self.valid = False
        self.value = ZERO_VALUES[self.kind]

    def scan(self, value: Any) -> None:
        if value is None:
            self.valid = False
            self.value = ZERO_VALUES[self.kind]
            return
        self.value = type(self).convert(value)
        self.valid = True

    def __repr__(self) -> str:
        return f'{type(self).__name__}(value={self.value!r}, valid={self.valid})'


class NullString(NullableTarget):
    kind = DecodeKind.STRING
    convert = staticmethod(to_string)


class NullBool(NullableTarget):
    kind = DecodeKind.BOOL
    convert = staticmethod(to_bool)


class NullInt64(NullableTarget):
    kind = DecodeKind.INT64
    convert = staticmethod(to_int64)


class NullFloat64(NullableTarget):
    kind = DecodeKind.FLOAT64
    convert = staticmethod(to_float64)


class NullTimestamp(NullableTarget):
    kind = DecodeKind.TIMESTAMP
    convert = staticmethod(to_timestamp)


TARGET_TYPES: dict[DecodeKind, type[DecodeTarget]] = {
    DecodeKind.STRING: NullString,
    DecodeKind.BOOL: NullBool,
    DecodeKind.INT64: NullInt64,
    DecodeKind.FLOAT64: NullFloat64,
    DecodeKind.TIMESTAMP: NullTimestamp,
    DecodeKind.RAW: RawTarget,
}


def new_target(kind: DecodeKind) -> DecodeTarget:
    """Create a fresh decode target for a kind."""
    return TARGET_TYPES[kind]()


# Column - Metadata derived from a cursor

class Column:
    """Result column metadata."""

    def __init__(self, name: str, type_name: str,
                 kind: DecodeKind = DecodeKind.RAW) -> None:
        self.name = name
        self.type_name = type_name
        self.kind = kind

    def __repr__(self) -> str:
        return (f'Column(name={self.name!r}, type_name={self.type_name!r}, '
                f'kind={self.kind.name})')

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Column):
            return NotImplemented
        return (self.name, self.type_name, self.kind) == (other.name, other.type_name, other.kind)

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'type_name': self.type_name,
            'kind': self.kind.value,
        }

    @staticmethod
    def get_names(columns: list[Self]) -> list[str]:
        return [col.name for col in columns]

    @staticmethod
    def get_column_types_dict(columns: list[Self]) -> dict[str, dict]:
        return {col.name: col.to_dict() for col in columns}
