"""
Cursor interface consumed by Recordset, and a PEP-249 adapter for it.

The interface is forward-only: `next()` advances to the following row,
`scan()` decodes the current row into one target per column, and `err()`
reports any error that ended iteration early.
"""
import logging
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Sequence
from typing import Any

from psycopg.postgres import types as pg_types

from recordset.exceptions import ScanError, TypeConversionError
from recordset.types import DecodeTarget

logger = logging.getLogger(__name__)


class RowsCursor(ABC):
    """Open, forward-only handle over an executed query's result rows.
    """

    @abstractmethod
    def columns(self) -> list[str]:
        """Ordered column names."""

    @abstractmethod
    def column_types(self) -> list[str]:
        """Ordered declared database type names, one per column."""

    @abstractmethod
    def next(self) -> bool:
        """Advance to the next row. Returns False once exhausted or on error."""

    @abstractmethod
    def scan(self, targets: Sequence[DecodeTarget]) -> None:
        """Decode the current row into `targets`, in column order."""

    @abstractmethod
    def err(self) -> BaseException | None:
        """Error that stopped iteration, if any."""


def postgres_type_name(type_code: Any) -> str:
    """Declared type name for a psycopg type OID, e.g. 20 -> 'INT8'."""
    info = pg_types.get(type_code)
    if info is None:
        return ''
    return info.name.upper()


def resolve_type_name(type_code: Any) -> str:
    """Declared type name from a cursor description type code."""
    if type_code is None:
        return ''
    if isinstance(type_code, str):
        return type_code
    if isinstance(type_code, int):
        return postgres_type_name(type_code)
    return ''


class DBAPICursor(RowsCursor):
    """RowsCursor over a DB-API 2.0 (PEP-249) cursor.

    Type names come from `type_names` when given, otherwise from the
    description type codes (psycopg OIDs are named through the psycopg
    type registry). sqlite3 does not report declared types, so its columns
    resolve to '' unless `type_names` is supplied.
    """

    def __init__(self, cursor: Any, type_names: Sequence[str] | None = None,
                 arraysize: int = 500) -> None:
        self.dbapi_cursor = cursor
        self.type_names = list(type_names) if type_names is not None else None
        self.arraysize = arraysize
        self._buffer: deque[Sequence[Any]] = deque()
        self._row: Sequence[Any] | None = None
        self._exhausted = False
        self._err: BaseException | None = None

    def __getattr__(self, name: str) -> Any:
        """Delegate members to underlying cursor."""
        return getattr(self.dbapi_cursor, name)

    def _description(self) -> Sequence[Any]:
        description = self.dbapi_cursor.description
        if description is None:
            raise ValueError('cursor has no result set')
        return description

    def columns(self) -> list[str]:
        return [desc[0] for desc in self._description()]

    def column_types(self) -> list[str]:
        description = self._description()
        if self.type_names is not None:
            if len(self.type_names) != len(description):
                raise ValueError(
                    f'expected {len(description)} type names, got {len(self.type_names)}'
                )
            return list(self.type_names)
        return [resolve_type_name(desc[1]) for desc in description]

    def next(self) -> bool:
        self._row = None
        if not self._buffer and not self._exhausted:
            try:
                self._buffer = deque(self.dbapi_cursor.fetchmany(self.arraysize))
            except Exception as exc:
                logger.debug(f'Fetch failed, ending iteration: {exc}')
                self._err = exc
                self._exhausted = True
                return False
            if not self._buffer:
                self._exhausted = True
        if not self._buffer:
            return False
        self._row = self._buffer.popleft()
        return True

    def scan(self, targets: Sequence[DecodeTarget]) -> None:
        if self._row is None:
            raise ScanError('scan called without a current row')
        if len(targets) != len(self._row):
            raise ScanError(
                f'expected {len(self._row)} destination arguments in scan, not {len(targets)}'
            )
        for i, (target, value) in enumerate(zip(targets, self._row)):
            try:
                target.scan(value)
            except TypeConversionError as exc:
                name = self._description()[i][0]
                raise ScanError(f'scan error on column index {i}, name {name!r}: {exc}') from exc

    def err(self) -> BaseException | None:
        return self._err
