"""
Materialize an executed query's rows into plain Python lists and dicts.

A Recordset wraps one open cursor (see `recordset.cursor.RowsCursor`) and
drains it into either:

- rows: a list of fixed-length lists, NULL cells collapsed to the zero value
  of the column's decode kind ('' / False / 0 / 0.0 / datetime.min)
- maps: a list of dicts, NULL cells omitted from the row's dict

Both operations read the cursor to exhaustion and never close it. Any
failure raises and discards the rows read so far.
"""
import logging
from typing import Any

from recordset.cursor import RowsCursor
from recordset.exceptions import InvalidInputError, IterationError
from recordset.exceptions import MetadataError, ScanError
from recordset.options import RecordsetOptions
from recordset.types import Column, NullableTarget, RawTarget, new_target

logger = logging.getLogger(__name__)


class Recordset:
    """Adapter from an open query cursor to generic rows.

    The cursor's lifetime belongs to the caller: it must be open before
    construction and closed by the caller afterwards, on success or error.
    """

    def __init__(self, cursor: RowsCursor | None,
                 options: RecordsetOptions | dict | None = None) -> None:
        """Initialize with an already executed cursor.

        Args:
            cursor: Open cursor positioned before its first row
            options: RecordsetOptions, a dict of option fields, or None
        """
        self.cursor = cursor
        if options is None:
            options = RecordsetOptions()
        elif isinstance(options, dict):
            options = RecordsetOptions(**options)
        self.options = options

    def _column_names(self) -> list[str]:
        try:
            return list(self.cursor.columns())
        except Exception as exc:
            raise MetadataError(f'failed to get column names: {exc}') from exc

    def _column_types(self) -> list[str]:
        try:
            return list(self.cursor.column_types())
        except Exception as exc:
            raise MetadataError(f'failed to get column types: {exc}') from exc

    def columns(self) -> list[Column]:
        """Column descriptors with the decode kind each column resolves to.
        """
        if self.cursor is None:
            raise InvalidInputError('rows is nil')
        names = self._column_names()
        type_names = self._column_types()
        if len(type_names) != len(names):
            raise MetadataError(
                f'failed to get column types: got {len(type_names)} types for {len(names)} columns'
            )
        mapping = self.options.type_mapping
        return [Column(name, type_name, mapping.resolve(type_name))
                for name, type_name in zip(names, type_names)]

    def _scan(self, targets: list) -> None:
        try:
            self.cursor.scan(targets)
        except Exception as exc:
            raise ScanError(f'failed to scan row: {exc}') from exc

    def query(self) -> list[list[Any]]:
        """Read every row as a list of values in column order.

        NULL cells of columns with a recognized declared type become that
        type's zero value, unless `keep_nulls` is set. Columns with any other
        type name pass the driver's value through unchanged.

        Raises
            InvalidInputError: the cursor is None
            MetadataError: column names or types could not be listed
            ScanError: a row could not be decoded
            IterationError: the cursor reported an error after its last row
        """
        columns = self.columns()
        kinds = [col.kind for col in columns]
        keep_nulls = self.options.keep_nulls

        data: list[list[Any]] = []
        try:
            while self.cursor.next():
                targets = [new_target(kind) for kind in kinds]
                self._scan(targets)

                row: list[Any] = [None] * len(targets)
                for i, target in enumerate(targets):
                    if isinstance(target, NullableTarget) and keep_nulls and not target.valid:
                        continue
                    row[i] = target.value
                data.append(row)
        except ScanError:
            logger.error(f'Failed to scan row {len(data) + 1} of {len(columns)} columns')
            raise

        if (err := self.cursor.err()) is not None:
            raise IterationError(f'error during row iteration: {err}') from err

        logger.debug(f'Materialized {len(data)} rows of {len(columns)} columns')
        return data

    def query_as_map(self) -> list[dict[str, Any]]:
        """Read every row as a dict of column name to value.

        Columns whose decoded value is None are left out of the row's dict.
        When column names repeat, the rightmost column's value is kept.

        The cursor is not checked for None here; a missing cursor surfaces
        as a MetadataError from the column name lookup.
        """
        names = self._column_names()
        targets = [RawTarget() for _ in names]

        result: list[dict[str, Any]] = []
        try:
            while self.cursor.next():
                self._scan(targets)
                row = {}
                for name, target in zip(names, targets):
                    if target.value is not None:
                        row[name] = target.value
                result.append(row)
        except ScanError:
            logger.error(f'Failed to scan row {len(result) + 1} of {len(names)} columns')
            raise

        if (err := self.cursor.err()) is not None:
            raise IterationError(f'error iterating rows: {err}') from err

        logger.debug(f'Materialized {len(result)} maps of {len(names)} columns')
        return result

    def load(self, **kwargs: Any) -> Any:
        """Materialize with `query` and hand the rows to the configured data loader.
        """
        columns = self.columns()
        data = self.query()
        return self.options.data_loader(data, columns, **kwargs)


def new_recordset(cursor: RowsCursor | None, **kwargs: Any) -> Recordset:
    """Wrap an open cursor. Performs no I/O and does not fail.
    """
    return Recordset(cursor, **kwargs)
