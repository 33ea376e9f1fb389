"""Custom exception hierarchy for sqltag.

All public errors inherit from SqlTagError so callers can catch the base
class for any sqltag-specific failure.  Every error is raised while a query
is being built, never deferred to execution time.
"""
from __future__ import annotations


class SqlTagError(Exception):
    """Base exception for all sqltag errors."""


class MissingColumnValueError(SqlTagError):
    """Raised when a record passed to ``spread_insert`` lacks a column value.

    The column set of a multi-row INSERT is the union of all records' keys,
    so every record must supply a value for every column.  A missing value
    is never coerced to NULL.

    Args:
        column: The column the record has no value for.
        record_index: Zero-based position of the offending record.
    """

    def __init__(self, column: str, record_index: int) -> None:
        super().__init__(
            f'Missing value for column "{column}" in record #{record_index}.'
        )
        self.column = column
        self.record_index = record_index


class EmptyRecordError(SqlTagError):
    """Raised when a spread helper has no columns left to render.

    ``spread_and({})`` would otherwise yield ``()``, which is not valid SQL,
    and an empty ``spread_update`` would leave a dangling ``SET``.

    Args:
        helper: Name of the spread helper that received the empty input.
    """

    def __init__(self, helper: str) -> None:
        super().__init__(
            f"{helper}() needs at least one column with a value; got none."
        )
        self.helper = helper


class TemplateError(SqlTagError):
    """Raised when a template's segments and expressions do not line up.

    Args:
        message: Human-readable description.
        template: The offending template, when available.
    """

    def __init__(self, message: str, template: object | None = None) -> None:
        super().__init__(message)
        self.template = template


class InvalidValueError(SqlTagError, TypeError):
    """Raised when a public constructor receives an argument it cannot accept.

    Examples are non-string raw SQL, a builder passed to ``sql.safe`` or a
    placeholder start index below 1.
    """


class UnsupportedDialectError(SqlTagError):
    """Raised when no dialect is registered under the requested name.

    Args:
        name: The requested dialect name.
        registered: Names currently known to the registry.
    """

    def __init__(self, name: str, registered: list[str]) -> None:
        super().__init__(
            f"Unsupported dialect: '{name}'. Registered dialects: {registered}."
        )
        self.name = name
        self.registered = registered
