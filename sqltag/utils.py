"""Small helpers shared by the tag and the spread helpers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from sqltag.dialects.base import Dialect
from sqltag.dialects.registry import resolve_dialect
from sqltag.errors import InvalidValueError


class _Unset:
    """Type of :data:`UNSET`.  There is exactly one instance."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNSET"


#: Marks a record entry as "no value".  Spread helpers drop such entries;
#: ``None`` on the other hand is a real value that binds as SQL NULL.
UNSET: Any = _Unset()


def filter_unset(record: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``record`` without its :data:`UNSET` entries."""
    return {key: value for key, value in record.items() if value is not UNSET}


def extract_keys(records: Iterable[Mapping[str, Any]]) -> list[str]:
    """Return the union of all records' keys, in first-seen order."""
    keys: dict[str, None] = {}
    for record in records:
        for key in record:
            keys.setdefault(key, None)
    return list(keys)


def merge_lists(first: Sequence[str], second: Sequence[str]) -> list[str]:
    """Interleave ``first`` and ``second``, starting with ``first``.

    ``merge_lists(["a", "b", "c"], ["1", "2"])`` returns
    ``["a", "1", "b", "2", "c"]``.  Surplus items of the longer list are
    appended at the end.
    """
    merged: list[str] = []
    for index, item in enumerate(first):
        merged.append(item)
        if index < len(second):
            merged.append(second[index])
    merged.extend(second[len(first):])
    return merged


def escape_identifier(name: str, dialect: Dialect | str | None = None) -> str:
    """Quote a SQL identifier (table or column name) for ``dialect``.

    Args:
        name: The identifier to quote.
        dialect: Dialect instance or registered name; PostgreSQL by default.

    Returns:
        Properly quoted identifier.

    Raises:
        InvalidValueError: If ``name`` is not a non-empty string.

    Examples:
        >>> escape_identifier("email")
        '"email"'
        >>> escape_identifier('weird"name')
        '"weird""name"'
        >>> escape_identifier("table", dialect="mysql")
        '`table`'
    """
    if not isinstance(name, str) or not name:
        raise InvalidValueError(f"Identifier must be a non-empty string, got {name!r}.")
    return resolve_dialect(dialect).quote_identifier(name)
