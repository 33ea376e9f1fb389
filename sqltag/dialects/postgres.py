"""PostgreSQL dialect."""

from __future__ import annotations

from sqltag.dialects.base import Dialect
from sqltag.dialects.registry import DialectFactory


@DialectFactory.register("postgres")
class PostgresDialect(Dialect):
    """PostgreSQL-flavoured placeholders and quoting.

    Parameter style: ``$1``, ``$2``, … – the server's native positional
    syntax, as used by ``asyncpg`` and ``node-postgres``-style drivers.
    """

    @property
    def dialect_name(self) -> str:
        return "postgres"

    def param_placeholder(self, index: int) -> str:
        return f"${index}"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace('"', '""')
        return f'"{escaped}"'
