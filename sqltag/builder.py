"""Value serializer and the ``SqlBuilder`` fragment variants.

``serialize`` turns any interpolated expression into a
:class:`Serialized` ``(text, values)`` pair whose placeholders start at a
given 1-based index.  Dispatch, in priority order:

1. :class:`SqlBuilder` – delegated to the builder itself.
2. ``list`` / ``tuple`` – every element serialized with running index
   continuation, joined with ``", "`` and wrapped in parentheses.
3. anything else, ``None`` included – one bound parameter.

Unknown types therefore always fall through to parameter binding, never to
raw text.

Builder variants
----------------
RawSqlBuilder
    Verbatim SQL, zero parameters.  The caller owns the injection risk.
ParamSqlBuilder
    Exactly one parameter, whatever the value's shape.
CompositeSqlBuilder
    Wraps ``fn(start_index, dialect) -> Serialized``; the extension point
    used by the spread helpers.
:class:`~sqltag.tag.Query`
    A finished query, re-numbered whenever it is nested in another one.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from sqltag.dialects.base import Dialect
from sqltag.dialects.registry import resolve_dialect
from sqltag.errors import InvalidValueError

#: Signature of the function wrapped by :class:`CompositeSqlBuilder`.
BuildFn = Callable[[int, Dialect], "Serialized"]


@dataclass(frozen=True)
class Serialized:
    """SQL text plus the parameter values its placeholders refer to.

    Attributes:
        text: SQL fragment.
        values: Parameter values, in placeholder order.
    """

    text: str
    values: tuple[Any, ...] = ()

    @property
    def param_count(self) -> int:
        return len(self.values)


class SqlBuilder(ABC):
    """A deferred SQL fragment.

    Building is referentially transparent apart from numbering: the same
    ``start_index`` and ``dialect`` always give the same result.
    """

    @abstractmethod
    def build(self, start_index: int, dialect: Dialect) -> Serialized:
        """Render this fragment with placeholders starting at ``start_index``.

        Args:
            start_index: 1-based position of the first parameter.
            dialect: Dialect providing placeholder and quoting syntax.

        Returns:
            :class:`Serialized` text and the values it consumed.
        """


class RawSqlBuilder(SqlBuilder):
    """Injects ``text`` verbatim.  No SQL escaping whatsoever.

    Only the dialect's driver-level escaping (e.g. ``%`` → ``%%`` for
    MySQL) is applied, so the database sees exactly ``text``.
    """

    __slots__ = ("text",)

    def __init__(self, text: str) -> None:
        self.text = text

    def build(self, start_index: int, dialect: Dialect) -> Serialized:
        return Serialized(dialect.escape_literal(self.text))

    def __repr__(self) -> str:
        return f"RawSqlBuilder({self.text!r})"


class ParamSqlBuilder(SqlBuilder):
    """Binds ``value`` as exactly one parameter, even if it is a list."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def build(self, start_index: int, dialect: Dialect) -> Serialized:
        return Serialized(dialect.param_placeholder(start_index), (self.value,))

    def __repr__(self) -> str:
        return f"ParamSqlBuilder({self.value!r})"


class CompositeSqlBuilder(SqlBuilder):
    """Delegates building to ``fn(start_index, dialect)``.

    ``fn`` may call :func:`serialize` on nested values; it must return a
    :class:`Serialized` whose placeholders are numbered from
    ``start_index`` without gaps.
    """

    __slots__ = ("fn",)

    def __init__(self, fn: BuildFn) -> None:
        self.fn = fn

    def build(self, start_index: int, dialect: Dialect) -> Serialized:
        return self.fn(start_index, dialect)

    def __repr__(self) -> str:
        return f"CompositeSqlBuilder({self.fn!r})"


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------


def raw_sql_builder(text: str) -> SqlBuilder:
    """Return a builder injecting ``text`` as raw SQL.

    Raises:
        InvalidValueError: If ``text`` is not a ``str``.
    """
    if not isinstance(text, str):
        raise InvalidValueError(
            f"Raw SQL must be a str, got {type(text).__name__}."
        )
    return RawSqlBuilder(text)


def param_sql_builder(value: Any) -> SqlBuilder:
    """Return a builder binding ``value`` as one parameter."""
    return ParamSqlBuilder(value)


def mk_sql_builder(fn: BuildFn) -> SqlBuilder:
    """Return a builder that delegates to ``fn(start_index, dialect)``."""
    if not callable(fn):
        raise InvalidValueError(f"Expected a callable, got {type(fn).__name__}.")
    return CompositeSqlBuilder(fn)


def is_sql_builder(value: Any) -> bool:
    """Return ``True`` if ``value`` is any :class:`SqlBuilder` variant."""
    return isinstance(value, SqlBuilder)


def freeze(value: Any) -> Any:
    """Snapshot ``value`` for deferred serialization.

    Lists and tuples (nested ones included) become tuples, which serialize
    identically, so later mutation of the caller's list cannot change what a
    builder renders.  Anything else is bound whole and is returned as is.
    """
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


# ---------------------------------------------------------------------------
# Serializer
# ---------------------------------------------------------------------------


def serialize(
    value: Any,
    start_index: int = 1,
    dialect: Dialect | str | None = None,
) -> Serialized:
    """Serialize an interpolated expression.

    Args:
        value: Builder, list/tuple or any scalar.
        start_index: 1-based position of the first placeholder.
        dialect: Dialect instance or registered name; PostgreSQL by default.

    Returns:
        :class:`Serialized` text and the values it consumed.

    Raises:
        InvalidValueError: If ``start_index`` is not an integer >= 1.
    """
    if isinstance(start_index, bool) or not isinstance(start_index, int) or start_index < 1:
        raise InvalidValueError(f"start_index must be an integer >= 1, got {start_index!r}.")
    return _serialize(value, start_index, resolve_dialect(dialect))


def _serialize(value: Any, start_index: int, dialect: Dialect) -> Serialized:
    if isinstance(value, SqlBuilder):
        return value.build(start_index, dialect)
    if isinstance(value, (list, tuple)):
        return _serialize_list(value, start_index, dialect)
    return Serialized(dialect.param_placeholder(start_index), (value,))


def _serialize_list(items: list | tuple, start_index: int, dialect: Dialect) -> Serialized:
    texts, values = serialize_all(items, start_index, dialect)
    return Serialized(f"({', '.join(texts)})", values)


def serialize_all(
    items: Iterable[Any],
    start_index: int,
    dialect: Dialect,
) -> tuple[list[str], tuple[Any, ...]]:
    """Serialize ``items`` left-to-right with running index continuation.

    Item *i* starts numbering where item *i - 1* stopped, so the returned
    values line up with the placeholders of the joined texts.

    Returns:
        The rendered text of every item, and all their values concatenated.
    """
    texts: list[str] = []
    values: list[Any] = []
    for item in items:
        part = _serialize(item, start_index + len(values), dialect)
        texts.append(part.text)
        values.extend(part.values)
    return texts, tuple(values)
