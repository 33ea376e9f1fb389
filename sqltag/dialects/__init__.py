"""sqltag dialects: placeholder syntax and identifier quoting per backend."""
from sqltag.dialects.base import Dialect
from sqltag.dialects.mysql import MySQLDialect
from sqltag.dialects.postgres import PostgresDialect
from sqltag.dialects.registry import DEFAULT_DIALECT, DialectFactory, resolve_dialect
from sqltag.dialects.sqlalchemy import SQLAlchemyDialect
from sqltag.dialects.sqlite import SQLiteDialect

__all__ = [
    "DEFAULT_DIALECT",
    "Dialect",
    "DialectFactory",
    "MySQLDialect",
    "PostgresDialect",
    "SQLAlchemyDialect",
    "SQLiteDialect",
    "resolve_dialect",
]
