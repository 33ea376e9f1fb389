"""Spread helpers: expand records into WHERE, INSERT and UPDATE fragments.

Each helper returns a deferred builder, so the record's values are numbered
wherever the fragment ends up in the enclosing query::

    sql("SELECT * FROM users WHERE {}", spread_and({"name": "John", "active": True}))
    # SELECT * FROM users WHERE ("name" = $1 AND "active" = $2)

    sql("INSERT INTO users {}", spread_insert({"name": "John"}, {"name": "Jane"}))
    # INSERT INTO users ("name") VALUES ($1), ($2)

    sql("UPDATE users SET {} WHERE id = {}", spread_update({"name": "John"}), 7)
    # UPDATE users SET "name" = $1 WHERE id = $2

Entries whose value is :data:`~sqltag.utils.UNSET` are dropped first;
``None`` is kept and bound as NULL.  Values go through the same serializer
as template expressions, so lists and builders behave identically.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqltag.builder import Serialized, SqlBuilder, freeze, mk_sql_builder, serialize_all
from sqltag.dialects.base import Dialect
from sqltag.errors import EmptyRecordError, InvalidValueError, MissingColumnValueError
from sqltag.utils import UNSET, extract_keys, filter_unset


def _columns_of(record: Any, helper: str) -> dict[str, Any]:
    if not isinstance(record, Mapping):
        raise InvalidValueError(
            f"{helper}() expects a mapping of column names to values, "
            f"got {type(record).__name__}."
        )
    filtered = filter_unset(record)
    for column in filtered:
        if not isinstance(column, str) or not column:
            raise InvalidValueError(
                f"{helper}() column names must be non-empty strings, got {column!r}."
            )
    return filtered


def _assignments(items: list[tuple[str, Any]], separator: str) -> SqlBuilder:
    """Return a builder rendering ``"col" = <value>`` pairs joined by ``separator``."""
    columns = [column for column, _ in items]
    values = tuple(freeze(value) for _, value in items)

    def build(start_index: int, dialect: Dialect) -> Serialized:
        texts, params = serialize_all(values, start_index, dialect)
        chain = separator.join(
            f"{dialect.quote_identifier(column)} = {text}"
            for column, text in zip(columns, texts)
        )
        return Serialized(chain, params)

    return mk_sql_builder(build)


def spread_and(record: Mapping[str, Any]) -> SqlBuilder:
    """Turn ``record`` into a parenthesized ``AND`` chain of equality tests.

    Raises:
        EmptyRecordError: If no column has a value.
    """
    columns = _columns_of(record, "spread_and")
    if not columns:
        raise EmptyRecordError("spread_and")
    chain = _assignments(list(columns.items()), " AND ")

    def build(start_index: int, dialect: Dialect) -> Serialized:
        inner = chain.build(start_index, dialect)
        return Serialized(f"({inner.text})", inner.values)

    return mk_sql_builder(build)


def spread_insert(*records: Mapping[str, Any]) -> SqlBuilder:
    """Turn ``records`` into an INSERT column list and ``VALUES`` rows.

    The column list is the union of all records' keys in first-seen order.

    Raises:
        EmptyRecordError: If no records, or no columns with a value, are given.
        MissingColumnValueError: If a record has no value for a column that
            another record sets.
    """
    filtered = [_columns_of(record, "spread_insert") for record in records]
    columns = extract_keys(filtered)
    if not columns:
        raise EmptyRecordError("spread_insert")

    rows: list[tuple[Any, ...]] = []
    for record_index, record in enumerate(filtered):
        row = []
        for column in columns:
            value = record.get(column, UNSET)
            if value is UNSET:
                raise MissingColumnValueError(column, record_index)
            row.append(freeze(value))
        rows.append(tuple(row))

    def build(start_index: int, dialect: Dialect) -> Serialized:
        # Each row is a tuple, so the serializer renders it as "(v1, v2, …)".
        texts, params = serialize_all(rows, start_index, dialect)
        column_list = ", ".join(dialect.quote_identifier(column) for column in columns)
        return Serialized(f"({column_list}) VALUES {', '.join(texts)}", params)

    return mk_sql_builder(build)


def spread_update(record: Mapping[str, Any]) -> SqlBuilder:
    """Turn ``record`` into a comma-separated ``SET`` list, without parentheses.

    Raises:
        EmptyRecordError: If no column has a value.
    """
    columns = _columns_of(record, "spread_update")
    if not columns:
        raise EmptyRecordError("spread_update")
    return _assignments(list(columns.items()), ", ")
