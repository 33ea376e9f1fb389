"""sqltag – injection-proof SQL from templates.

Interpolate, Don't Concatenate.

Public API
----------
``sql``
    Template tag returning a ``Query`` (``text`` plus ``values``).  Every
    interpolated expression becomes a bound parameter unless wrapped in
    ``sql.raw()``.

``spread_and`` / ``spread_insert`` / ``spread_update``
    Expand records into WHERE, INSERT and UPDATE fragments.

Re-exported types
-----------------
``Query``, ``SqlTag``, ``TagConfig``, the ``SqlBuilder`` variants, the
dialects and all error classes.

Extensibility
-------------
Custom fragments are built with ``mk_sql_builder``::

    from sqltag import Serialized, mk_sql_builder, serialize

    def any_of(column, values):
        def build(start_index, dialect):
            inner = serialize(list(values), start_index, dialect)
            return Serialized(
                f"{dialect.quote_identifier(column)} IN {inner.text}", inner.values
            )
        return mk_sql_builder(build)

New dialects are registered via::

    from sqltag.dialects import Dialect, DialectFactory

    @DialectFactory.register("oracle")
    class OracleDialect(Dialect):
        ...
"""

from __future__ import annotations

import logging

from sqltag.builder import (
    CompositeSqlBuilder,
    ParamSqlBuilder,
    RawSqlBuilder,
    Serialized,
    SqlBuilder,
    is_sql_builder,
    mk_sql_builder,
    param_sql_builder,
    raw_sql_builder,
    serialize,
)
from sqltag.config import TagConfig
from sqltag.dialects import (
    Dialect,
    DialectFactory,
    MySQLDialect,
    PostgresDialect,
    SQLAlchemyDialect,
    SQLiteDialect,
)
from sqltag.errors import (
    EmptyRecordError,
    InvalidValueError,
    MissingColumnValueError,
    SqlTagError,
    TemplateError,
    UnsupportedDialectError,
)
from sqltag.spread import spread_and, spread_insert, spread_update
from sqltag.tag import Query, SqlTag, identifier, join, raw, safe, sql
from sqltag.trace import clear_trace_sink, get_trace_sink, set_trace_sink
from sqltag.utils import UNSET, escape_identifier

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Template tag
    "sql",
    "SqlTag",
    "Query",
    "raw",
    "safe",
    "identifier",
    "join",
    # Spread helpers
    "spread_and",
    "spread_insert",
    "spread_update",
    "UNSET",
    # Builders
    "Serialized",
    "SqlBuilder",
    "RawSqlBuilder",
    "ParamSqlBuilder",
    "CompositeSqlBuilder",
    "serialize",
    "mk_sql_builder",
    "raw_sql_builder",
    "param_sql_builder",
    "is_sql_builder",
    # Dialects
    "Dialect",
    "DialectFactory",
    "PostgresDialect",
    "SQLiteDialect",
    "MySQLDialect",
    "SQLAlchemyDialect",
    "escape_identifier",
    # Configuration
    "TagConfig",
    # Tracing
    "set_trace_sink",
    "clear_trace_sink",
    "get_trace_sink",
    # Errors
    "SqlTagError",
    "MissingColumnValueError",
    "EmptyRecordError",
    "TemplateError",
    "InvalidValueError",
    "UnsupportedDialectError",
]
