"""Adapters handing built queries to other libraries.

SQLAlchemy converter
--------------------
:func:`to_sqlalchemy` turns a :class:`~sqltag.tag.Query` into a
:func:`sqlalchemy.text` construct with bound parameters, whatever dialect
the query was originally built for.

Colons in the query's literal SQL are escaped for ``text()``, so PostgreSQL
``::type`` casts right after an interpolated value keep working.

Install the optional dependency before using this module::

    pip install "sqltag[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from sqltag import spread_and, sql
    from sqltag.converters import to_sqlalchemy

    engine = create_engine("sqlite:///mydb.db")
    query = sql("SELECT * FROM users WHERE {}", spread_and({"name": "John"}))
    with engine.connect() as conn:
        rows = conn.execute(to_sqlalchemy(query)).all()
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqltag.dialects.registry import DialectFactory
from sqltag.dialects.sqlalchemy import bind_name

if TYPE_CHECKING:
    from sqlalchemy import TextClause

    from sqltag.tag import Query


def to_sqlalchemy_params(query: Query) -> tuple[str, dict[str, Any]]:
    """Render ``query`` with ``:p1``-style binds.

    Returns:
        The SQL text and a ``{"p1": value, …}`` parameter mapping.
    """
    rendered = query.build(1, DialectFactory.create("sqlalchemy"))
    params = {bind_name(index): value for index, value in enumerate(rendered.values, start=1)}
    return rendered.text, params


def to_sqlalchemy(query: Query) -> TextClause:
    """Return ``query`` as a :func:`sqlalchemy.text` clause with bound values.

    Args:
        query: A query built by the ``sql`` tag.

    Returns:
        A ``TextClause`` ready for ``Connection.execute``.
    """
    from sqlalchemy import text

    sql_text, params = to_sqlalchemy_params(query)
    return text(sql_text).bindparams(**params)
