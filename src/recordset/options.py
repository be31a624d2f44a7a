from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pandas as pd
import pyarrow as pa
from recordset.config.type_mapping import TypeMapping
from recordset.types import Column

from libb import ConfigOptions

__all__ = [
    'RecordsetOptions',
    'iterrows_data_loader',
    'iterdict_data_loader',
    'pandas_numpy_data_loader',
    'pandas_pyarrow_data_loader',
]


def iterrows_data_loader(data, columns, **kwargs) -> list[list]:
    """Minimal data loader: the rows exactly as `Recordset.query` built them.
    """
    if not data:
        return []
    return list(data)


def iterdict_data_loader(data, columns, **kwargs) -> list[dict]:
    """Zip each row with the column names.

    Unlike `Recordset.query_as_map`, every column is kept, so NULL cells show
    up under their zero value (or None with `keep_nulls`).
    """
    if not data:
        return []
    names = Column.get_names(columns)
    return [dict(zip(names, row)) for row in data]


def _empty_dataframe(columns) -> pd.DataFrame:
    """Create empty DataFrame with column metadata."""
    df = pd.DataFrame(columns=Column.get_names(columns))
    df.attrs['column_types'] = Column.get_column_types_dict(columns)
    return df


def pandas_numpy_data_loader(data, columns, **kwargs) -> pd.DataFrame:
    """Standard pandas DataFrame loader using NumPy.

    Always returns a DataFrame, never None, with columns preserved for empty results.
    Includes type information in the DataFrame.attrs attribute.
    """
    if not data:
        return _empty_dataframe(columns)

    df = pd.DataFrame.from_records(list(data), columns=Column.get_names(columns))
    df.attrs['column_types'] = Column.get_column_types_dict(columns)
    return df


def pandas_pyarrow_data_loader(data, columns, **kwargs) -> pd.DataFrame:
    """PyArrow-based pandas DataFrame loader.

    Always returns a DataFrame, never None, with columns preserved for empty results.
    """
    if not data:
        return _empty_dataframe(columns)

    column_names = Column.get_names(columns)
    columns_data = [[row[i] for row in data] for i in range(len(column_names))]
    df = pa.table(columns_data, names=column_names).to_pandas(types_mapper=pd.ArrowDtype)
    df.attrs['column_types'] = Column.get_column_types_dict(columns)
    return df


@dataclass
class RecordsetOptions(ConfigOptions):
    """Options

    type_mapping: a TypeMapping, or a dict of declared type name -> decode kind
    overrides merged onto the default mapping. None uses the default mapping.

    keep_nulls: emit None for NULL cells in `Recordset.query` instead of the
    zero value of the column's kind (default: False).

    data_loader: callable(rows, columns, **kwargs) used by `Recordset.load`
    (default: iterrows_data_loader).
    """
    type_mapping: TypeMapping | dict[str, Any] | None = None
    keep_nulls: bool = False
    data_loader: Callable[..., Any] | None = None

    def __post_init__(self):
        if self.type_mapping is None:
            self.type_mapping = TypeMapping.get_instance()
        elif isinstance(self.type_mapping, dict):
            mapping = TypeMapping.get_instance().copy()
            mapping.update(self.type_mapping)
            self.type_mapping = mapping
        elif not isinstance(self.type_mapping, TypeMapping):
            raise ValueError('type_mapping must be a TypeMapping or a dict')
        if self.data_loader is None:
            self.data_loader = iterrows_data_loader
        if not callable(self.data_loader):
            raise ValueError('data_loader must be callable')
