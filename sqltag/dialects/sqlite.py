"""SQLite dialect."""
from __future__ import annotations

from sqltag.dialects.base import Dialect
from sqltag.dialects.registry import DialectFactory


@DialectFactory.register("sqlite")
class SQLiteDialect(Dialect):
    """SQLite-flavoured placeholders and quoting.

    Parameter style: ``?`` – compatible with Python's built-in ``sqlite3``
    positional execution (``cursor.execute(sql, values)``).
    """

    @property
    def dialect_name(self) -> str:
        return "sqlite"

    def param_placeholder(self, index: int) -> str:
        return "?"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace('"', '""')
        return f'"{escaped}"'
