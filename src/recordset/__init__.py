"""
Materialize SQL query results into generic rows and column maps.

Wrap an executed cursor and read it as:
- Rows: Recordset(cursor).query() -> [[1, 'Alice'], [2, ''], ...]
- Maps: Recordset(cursor).query_as_map() -> [{'id': 1, 'name': 'Alice'}, {'id': 2}, ...]

DB-API 2.0 cursors (sqlite3, psycopg) are adapted with DBAPICursor.
"""
__version__ = '0.1.0'

from recordset.config.type_mapping import TypeMapping
from recordset.cursor import DBAPICursor, RowsCursor
from recordset.exceptions import DriverError, InvalidInputError
from recordset.exceptions import IterationError, MetadataError, RecordsetError
from recordset.exceptions import ScanError, TypeConversionError
from recordset.options import RecordsetOptions, iterdict_data_loader
from recordset.options import iterrows_data_loader, pandas_numpy_data_loader
from recordset.options import pandas_pyarrow_data_loader
from recordset.recordset import Recordset, new_recordset
from recordset.types import Column, DecodeKind

__all__ = [
    'Recordset',
    'new_recordset',
    'RowsCursor',
    'DBAPICursor',
    'RecordsetOptions',
    'TypeMapping',
    'DecodeKind',
    'Column',
    'iterrows_data_loader',
    'iterdict_data_loader',
    'pandas_numpy_data_loader',
    'pandas_pyarrow_data_loader',
    'RecordsetError',
    'InvalidInputError',
    'MetadataError',
    'ScanError',
    'IterationError',
    'TypeConversionError',
    'DriverError',
]
