"""
Integration tests materializing real sqlite3 cursors.
"""
import datetime

import pytest
from recordset import DBAPICursor, Recordset
from recordset.exceptions import MetadataError, ScanError

from tests.fixtures.sqlite import PEOPLE_TYPES


@pytest.mark.sqlite
def test_query_with_declared_types(people_dbapi_cursor):
    rows = Recordset(DBAPICursor(people_dbapi_cursor, type_names=PEOPLE_TYPES)).query()

    assert rows == [
        [1, 'Alice', True, 9.5, datetime.datetime(2024, 1, 2, 3, 4, 5), b'\x01\x02'],
        [2, '', False, 0.0, datetime.datetime.min, None],
        [3, 'Carol', False, 7.25, datetime.datetime(2024, 3, 4), b''],
    ]
    assert people_dbapi_cursor.fetchone() is None


@pytest.mark.sqlite
def test_query_without_declared_types(people_dbapi_cursor):
    """sqlite3 reports no declared types, so every column passes through raw"""
    rows = Recordset(DBAPICursor(people_dbapi_cursor)).query()

    assert rows[1] == [2, None, 0, None, None, None]
    assert rows[2][4] == '2024-03-04'


@pytest.mark.sqlite
def test_query_as_map(people_dbapi_cursor):
    result = Recordset(DBAPICursor(people_dbapi_cursor)).query_as_map()

    assert result == [
        {'id': 1, 'name': 'Alice', 'active': 1, 'score': 9.5,
         'created': '2024-01-02T03:04:05', 'avatar': b'\x01\x02'},
        {'id': 2, 'active': 0},
        {'id': 3, 'name': 'Carol', 'score': 7.25, 'created': '2024-03-04', 'avatar': b''},
    ]


@pytest.mark.sqlite
def test_column_aliases_and_duplicates(sqlite_conn):
    cursor = sqlite_conn.execute('SELECT id AS v, name AS v FROM people ORDER BY id')
    result = Recordset(DBAPICursor(cursor)).query_as_map()

    assert result == [{'v': 'Alice'}, {'v': 2}, {'v': 'Carol'}]


@pytest.mark.sqlite
def test_empty_result(sqlite_conn):
    cursor = sqlite_conn.execute('SELECT id, name FROM people WHERE id < 0')

    assert Recordset(DBAPICursor(cursor, type_names=['BIGINT', 'TEXT'])).query() == []

    cursor = sqlite_conn.execute('SELECT id, name FROM people WHERE id < 0')
    assert Recordset(DBAPICursor(cursor)).query_as_map() == []


@pytest.mark.sqlite
def test_conversion_failure(sqlite_conn):
    cursor = sqlite_conn.execute('SELECT name FROM people ORDER BY id')

    with pytest.raises(ScanError, match="name 'name'"):
        Recordset(DBAPICursor(cursor, type_names=['BIGINT'])).query()


@pytest.mark.sqlite
def test_statement_without_result_set(sqlite_conn):
    cursor = sqlite_conn.execute("UPDATE people SET name = 'Bob' WHERE id = 2")

    with pytest.raises(MetadataError, match='failed to get column names'):
        Recordset(DBAPICursor(cursor)).query()


@pytest.mark.sqlite
def test_load_pandas(people_dbapi_cursor):
    from recordset.options import pandas_numpy_data_loader

    rs = Recordset(DBAPICursor(people_dbapi_cursor, type_names=PEOPLE_TYPES),
                   {'data_loader': pandas_numpy_data_loader})
    df = rs.load()

    assert list(df.columns) == ['id', 'name', 'active', 'score', 'created', 'avatar']
    assert list(df['name']) == ['Alice', '', 'Carol']
    assert df.attrs['column_types']['active']['kind'] == 'bool'


if __name__ == '__main__':
    __import__('pytest').main([__file__])
