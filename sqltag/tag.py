"""The ``sql`` template tag and the :class:`Query` it returns.

A template is a run of literal segments ``L0 … Ln`` with ``n`` interpolated
expressions between them.  The tag serializes every expression left to
right, numbering placeholders from 1, and interleaves the rendered texts
with the literal segments.  Three template spellings are accepted::

    sql("SELECT * FROM users WHERE id = {}", user_id)
    sql("SELECT * FROM users WHERE id = {id}", id=user_id)
    sql(("SELECT * FROM users WHERE id = ", ""), user_id)

On Python 3.14+ a template string works as well: ``sql(t"... {user_id}")``.
"""
from __future__ import annotations

import string
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from sqltag.builder import (
    Serialized,
    SqlBuilder,
    freeze,
    is_sql_builder,
    mk_sql_builder,
    param_sql_builder,
    raw_sql_builder,
    serialize_all,
)
from sqltag.config import TagConfig
from sqltag.dialects.base import Dialect
from sqltag.errors import InvalidValueError, TemplateError
from sqltag.trace import emit
from sqltag.utils import merge_lists


@dataclass(frozen=True)
class Query(SqlBuilder):
    """The result of the ``sql`` tag: SQL text plus its parameter values.

    ``text`` and ``values`` are what a driver needs; a query unpacks into
    exactly those two, so ``cursor.execute(*query)`` works.  A query keeps
    its template parts as well, so it can be interpolated into another
    template and re-numbered there.

    Attributes:
        text: SQL string with 1-based positional placeholders.
        values: Parameter values; ``values[k - 1]`` belongs to placeholder *k*.
        dialect: Name of the dialect ``text`` was rendered for.
    """

    text: str
    values: tuple[Any, ...] = ()
    dialect: str = field(default="postgres", compare=False)
    segments: tuple[str, ...] | None = field(default=None, repr=False, compare=False)
    expressions: tuple[Any, ...] = field(default=(), repr=False, compare=False)

    @classmethod
    def from_parts(
        cls,
        segments: Sequence[str],
        expressions: Sequence[Any],
        dialect: Dialect,
    ) -> Query:
        """Render a template's parts with placeholders numbered from 1."""
        segments = tuple(segments)
        expressions = tuple(freeze(expression) for expression in expressions)
        text, values = _render(segments, expressions, 1, dialect)
        return cls(
            text=text,
            values=values,
            dialect=dialect.dialect_name,
            segments=segments,
            expressions=expressions,
        )

    def build(self, start_index: int, dialect: Dialect) -> Serialized:
        if start_index == 1 and dialect.dialect_name == self.dialect:
            return Serialized(self.text, self.values)
        if self.segments is None:
            if not self.values:
                return Serialized(self.text)
            raise InvalidValueError(
                "A Query constructed by hand cannot be re-numbered; build it with sql()."
            )
        text, values = _render(self.segments, self.expressions, start_index, dialect)
        return Serialized(text, values)

    def __iter__(self) -> Iterator[Any]:
        yield self.text
        yield self.values


def _render(
    segments: tuple[str, ...],
    expressions: tuple[Any, ...],
    start_index: int,
    dialect: Dialect,
) -> tuple[str, tuple[Any, ...]]:
    texts, values = serialize_all(expressions, start_index, dialect)
    literals = [dialect.escape_literal(segment) for segment in segments]
    return "".join(merge_lists(literals, texts)), values


# ---------------------------------------------------------------------------
# Template parsing
# ---------------------------------------------------------------------------


def parse_template(
    template: Any,
    args: Sequence[Any],
    kwargs: Mapping[str, Any],
) -> tuple[tuple[str, ...], tuple[Any, ...]]:
    """Split a template into its literal segments and expressions.

    Raises:
        TemplateError: If the template is malformed or does not match the
            expressions passed alongside it.
    """
    if isinstance(template, str):
        return _parse_format_string(template, args, kwargs)

    if hasattr(template, "strings") and hasattr(template, "interpolations"):
        if args or kwargs:
            raise TemplateError(
                "A template string carries its own expressions; got extra arguments.",
                template,
            )
        return _parse_template_string(template)

    if kwargs:
        raise TemplateError(
            "Keyword expressions are only supported with a format string.", template
        )
    if isinstance(template, (list, tuple)) and all(isinstance(s, str) for s in template):
        if len(template) != len(args) + 1:
            raise TemplateError(
                f"A template with {len(template)} segment(s) needs "
                f"{len(template) - 1} expression(s), got {len(args)}.",
                template,
            )
        return tuple(template), tuple(args)

    raise TemplateError(
        f"Unsupported template type: {type(template).__name__}.", template
    )


def _parse_template_string(template: Any) -> tuple[tuple[str, ...], tuple[Any, ...]]:
    expressions: list[Any] = []
    for interpolation in template.interpolations:
        if interpolation.conversion or interpolation.format_spec:
            raise TemplateError(
                f"Conversions and format specs are not allowed in SQL templates: "
                f"{{{interpolation.expression}}}.",
                template,
            )
        expressions.append(interpolation.value)
    return tuple(template.strings), tuple(expressions)


def _parse_format_string(
    fmt: str,
    args: Sequence[Any],
    kwargs: Mapping[str, Any],
) -> tuple[tuple[str, ...], tuple[Any, ...]]:
    formatter = string.Formatter()
    segments: list[str] = [""]
    expressions: list[Any] = []
    used: set[int | str] = set()
    next_auto = 0
    numbering: str | None = None

    try:
        parsed = list(formatter.parse(fmt))
    except ValueError as exc:
        raise TemplateError(f"Malformed SQL template: {exc}", fmt) from exc

    for literal, field_name, format_spec, conversion in parsed:
        segments[-1] += literal
        if field_name is None:
            continue
        if format_spec or conversion:
            raise TemplateError(
                f"Conversions and format specs are not allowed in SQL templates: "
                f"{{{field_name}}}.",
                fmt,
            )

        arg_name = field_name.split(".", 1)[0].split("[", 1)[0]
        if arg_name == "" or arg_name.isdigit():
            style = "manual" if arg_name else "auto"
            if numbering not in (None, style):
                raise TemplateError(
                    "Cannot switch between automatic and manual field numbering.", fmt
                )
            numbering = style
            if style == "auto":
                field_name = f"{next_auto}{field_name}"
                next_auto += 1

        try:
            value, key = formatter.get_field(field_name, args, kwargs)
        except (IndexError, KeyError, AttributeError, TypeError) as exc:
            raise TemplateError(
                f"No expression for template field {{{field_name}}}: {exc!r}", fmt
            ) from exc

        used.add(key)
        expressions.append(value)
        segments.append("")

    unused = [i for i in range(len(args)) if i not in used]
    unused += [k for k in kwargs if k not in used]
    if unused:
        raise TemplateError(f"Expressions not referenced by the template: {unused}.", fmt)

    return tuple(segments), tuple(expressions)


# ---------------------------------------------------------------------------
# Fragment constructors
# ---------------------------------------------------------------------------


def raw(text: str) -> SqlBuilder:
    """Inject ``text`` into the query verbatim.

    Attention: this bypasses parameter binding and can easily lead to SQL
    injection.  Only use it with trusted, constant SQL.
    """
    return raw_sql_builder(text)


def safe(value: Any) -> SqlBuilder:
    """Bind ``value`` as one parameter, even if it is a list or tuple.

    Raises:
        InvalidValueError: If ``value`` already is a builder.
    """
    if is_sql_builder(value):
        raise InvalidValueError(
            f"sql.safe() expects a plain value, got builder {value!r}."
        )
    return param_sql_builder(value)


def identifier(name: str) -> SqlBuilder:
    """Return a builder rendering ``name`` as a quoted identifier.

    The quoting follows whichever dialect the enclosing query is built with.
    """
    if not isinstance(name, str) or not name:
        raise InvalidValueError(f"Identifier must be a non-empty string, got {name!r}.")
    return mk_sql_builder(lambda start_index, dialect: Serialized(dialect.quote_identifier(name)))


def join(fragments: Iterable[Any], separator: str = ", ") -> SqlBuilder:
    """Return a builder serializing ``fragments`` and joining them.

    Each fragment goes through the serializer, so plain values are bound as
    parameters and builders are rendered in place.  ``separator`` is raw SQL.
    """
    if not isinstance(separator, str):
        raise InvalidValueError(f"Separator must be a str, got {type(separator).__name__}.")
    items = freeze(tuple(fragments))

    def build(start_index: int, dialect: Dialect) -> Serialized:
        texts, values = serialize_all(items, start_index, dialect)
        return Serialized(dialect.escape_literal(separator).join(texts), values)

    return mk_sql_builder(build)


# ---------------------------------------------------------------------------
# Tag
# ---------------------------------------------------------------------------


class SqlTag:
    """SQL template tag.  Returns a :class:`Query`.

    Template expressions are bound as parameters unless wrapped in
    :meth:`raw`::

        sql = SqlTag()
        query = sql("SELECT name, email FROM users WHERE id = {}", user_id)
        cursor.execute(query.text, query.values)

    Args:
        config: Dialect and tracing settings; defaults to ``TagConfig()``.
    """

    raw = staticmethod(raw)
    safe = staticmethod(safe)
    identifier = staticmethod(identifier)
    join = staticmethod(join)

    def __init__(self, config: TagConfig | None = None) -> None:
        self.config = config or TagConfig()
        self._dialect = self.config.create_dialect()

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    def __call__(self, template: Any, *args: Any, **kwargs: Any) -> Query:
        """Build a :class:`Query` from ``template`` and its expressions.

        Raises:
            TemplateError: If the template does not match its expressions.
            SqlTagError: Any error raised by a builder while rendering.
        """
        segments, expressions = parse_template(template, args, kwargs)
        query = Query.from_parts(segments, expressions, self._dialect)
        if self.config.trace:
            emit(query)
        return query

    def with_dialect(self, dialect: str) -> SqlTag:
        """Return a new tag identical to this one but for ``dialect``."""
        return SqlTag(TagConfig.model_validate({**self.config.model_dump(), "dialect": dialect}))

    def __repr__(self) -> str:
        return f"SqlTag(dialect={self.config.dialect!r}, trace={self.config.trace!r})"


#: Default tag: PostgreSQL placeholders, tracing enabled.
sql = SqlTag()
