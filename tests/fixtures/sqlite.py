import sqlite3

import pytest

PEOPLE_TYPES = ['BIGINT', 'VARCHAR', 'BOOL', 'DOUBLE', 'TIMESTAMP', 'BLOB']


@pytest.fixture
def sqlite_conn():
    """Create an in-memory SQLite database for testing"""
    conn = sqlite3.connect(':memory:')

    # Create test schema
    create_table = """
    CREATE TABLE people (
        id INTEGER PRIMARY KEY,
        name TEXT,
        active BOOLEAN,
        score REAL,
        created TEXT,
        avatar BLOB
    )
    """
    conn.execute(create_table)

    # Insert test data
    insert_data = """
    INSERT INTO people (id, name, active, score, created, avatar) VALUES
    (1, 'Alice', 1, 9.5, '2024-01-02T03:04:05', X'0102'),
    (2, NULL, 0, NULL, NULL, NULL),
    (3, 'Carol', NULL, 7.25, '2024-03-04', X'')
    """
    conn.execute(insert_data)
    conn.commit()

    yield conn
    conn.close()


@pytest.fixture
def people_dbapi_cursor(sqlite_conn):
    """Executed sqlite3 cursor over all people ordered by id."""
    cursor = sqlite_conn.cursor()
    cursor.execute('SELECT id, name, active, score, created, avatar FROM people ORDER BY id')
    yield cursor
    cursor.close()
