"""Test helpers: placeholder checks and sample records."""

from __future__ import annotations

import re

from sqltag.tag import Query

_PG_PLACEHOLDER = re.compile(r"\$(\d+)")

USERS = [
    {"name": "John", "email": "john@example.com", "age": 42},
    {"name": "Jane", "email": "jane@example.com", "age": 37},
    {"name": "Robert'); DROP TABLE users;--", "email": None, "age": 12},
]


def pg_placeholders(query: Query) -> list[int]:
    """Return the ``$n`` placeholder numbers of ``query`` in text order."""
    return [int(n) for n in _PG_PLACEHOLDER.findall(query.text)]


def assert_placeholders_match(query: Query) -> None:
    """Placeholders ``$1 … $k`` appear in order, once each, and ``k == len(values)``."""
    assert pg_placeholders(query) == list(range(1, len(query.values) + 1))
