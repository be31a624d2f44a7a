"""
Recordset-specific exception classes.
"""
import sqlite3

import psycopg


class RecordsetError(Exception):
    """Base class for all recordset module errors.
    """


class InvalidInputError(RecordsetError):
    """The wrapped cursor reference is missing.
    """


class MetadataError(RecordsetError):
    """Error listing column names or declared column types.
    """


class ScanError(RecordsetError):
    """Error decoding the current row into its decode targets.
    """


class IterationError(RecordsetError):
    """Error reported by the cursor after the last row was read.
    """


class TypeConversionError(RecordsetError):
    """Error coercing a database value into a decode target.
    """


DriverError = (
    psycopg.Error,
    sqlite3.Error,
    )
