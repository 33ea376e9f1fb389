"""MySQL dialect."""

from __future__ import annotations

from sqltag.dialects.base import Dialect
from sqltag.dialects.registry import DialectFactory


@DialectFactory.register("mysql")
class MySQLDialect(Dialect):
    """MySQL-flavoured placeholders and quoting.

    Parameter style: ``%s`` – compatible with ``PyMySQL`` and
    ``mysql-connector-python`` positional execution.

    Those drivers run ``text % values`` before sending the query, so every
    literal ``%`` in SQL text (``LIKE 'a%'``, ``DATE_FORMAT(d, '%Y')``) is
    doubled to ``%%``.

    Identifiers are quoted with backticks (`` ` ``) rather than double-quotes.
    """

    @property
    def dialect_name(self) -> str:
        return "mysql"

    def param_placeholder(self, index: int) -> str:
        return "%s"

    def escape_literal(self, text: str) -> str:
        return text.replace("%", "%%")

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace("`", "``")
        return self.escape_literal(f"`{escaped}`")
