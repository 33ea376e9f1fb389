"""SQLAlchemy ``text()`` dialect."""
from __future__ import annotations

from sqltag.dialects.base import Dialect
from sqltag.dialects.registry import DialectFactory

#: Prefix of the bind names emitted by :class:`SQLAlchemyDialect`.
BIND_PREFIX = "p"


@DialectFactory.register("sqlalchemy")
class SQLAlchemyDialect(Dialect):
    """Placeholders for :func:`sqlalchemy.text` constructs.

    Parameter style: ``:p1``, ``:p2``, … – named binds whose number is the
    1-based value position.  Used by :func:`sqltag.converters.to_sqlalchemy`.

    ``text()`` reads every ``:word`` as a bind, so colons in literal SQL
    (``::int`` casts, ``'12:30'``) are written as ``\\:``, which SQLAlchemy
    renders back to a plain colon.
    """

    @property
    def dialect_name(self) -> str:
        return "sqlalchemy"

    def param_placeholder(self, index: int) -> str:
        return f":{bind_name(index)}"

    def escape_literal(self, text: str) -> str:
        return text.replace(":", "\\:")

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace('"', '""')
        return self.escape_literal(f'"{escaped}"')


def bind_name(index: int) -> str:
    """Return the bind parameter name for the value at 1-based ``index``."""
    return f"{BIND_PREFIX}{index}"
