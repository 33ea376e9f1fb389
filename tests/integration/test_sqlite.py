"""Integration tests: build → execute against a real SQLite in-memory DB.

Every query is built with the SQLite dialect and executed through Python's
``sqlite3`` module, so placeholder/value alignment is checked by the
database itself rather than by string comparison.
"""
from __future__ import annotations

import sqlite3

import pytest

from sqltag import UNSET, spread_and, spread_insert, spread_update
from sqltag.tag import SqlTag
from tests.fixtures import USERS

DDL = """
CREATE TABLE users (
    id    INTEGER PRIMARY KEY AUTOINCREMENT,
    name  TEXT    NOT NULL,
    email TEXT,
    age   INTEGER
);
"""


@pytest.fixture()
def db(sq: SqlTag) -> sqlite3.Connection:
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.executescript(DDL)
    conn.execute(*sq("INSERT INTO users {}", spread_insert(*USERS)))
    yield conn
    conn.close()


def _names(conn: sqlite3.Connection, query) -> list[str]:
    return [row["name"] for row in conn.execute(*query)]


def test_multi_row_insert(db, sq):
    assert db.execute("SELECT COUNT(*) FROM users").fetchone()[0] == len(USERS)


def test_hostile_value_is_stored_not_executed(db, sq):
    hostile = USERS[2]["name"]
    assert _names(db, sq("SELECT name FROM users WHERE name = {}", hostile)) == [hostile]
    assert db.execute("SELECT COUNT(*) FROM users").fetchone()[0] == len(USERS)


def test_spread_and_filters(db, sq):
    q = sq(
        "SELECT name FROM users WHERE {} ORDER BY id",
        spread_and({"name": "Jane", "age": 37}),
    )
    assert _names(db, q) == ["Jane"]


def test_in_list_expansion(db, sq):
    q = sq("SELECT name FROM users WHERE age IN {} ORDER BY age", [12, 42, 99])
    assert _names(db, q) == [USERS[2]["name"], "John"]


def test_empty_in_list_matches_nothing(db, sq):
    assert _names(db, sq("SELECT name FROM users WHERE age IN {}", [])) == []


def test_null_binding(db, sq):
    q = sq("SELECT name FROM users WHERE email IS {}", None)
    assert _names(db, q) == [USERS[2]["name"]]


def test_update_with_unset_column(db, sq):
    db.execute(
        *sq(
            "UPDATE users SET {} WHERE name = {}",
            spread_update({"age": 43, "email": UNSET}),
            "John",
        )
    )
    row = db.execute(*sq("SELECT age, email FROM users WHERE name = {}", "John")).fetchone()
    assert row["age"] == 43
    assert row["email"] == "john@example.com"


def test_nested_subquery(db, sq):
    oldest = sq("SELECT MAX(age) FROM users WHERE age < {}", 40)
    q = sq("SELECT name FROM users WHERE email LIKE {} AND age = ({})", "%@example.com", oldest)
    assert _names(db, q) == ["Jane"]


def test_raw_identifier_and_order(db, sq):
    q = sq(
        "SELECT name FROM {} WHERE age > {} ORDER BY {} DESC",
        sq.identifier("users"),
        20,
        sq.raw("age"),
    )
    assert _names(db, q) == ["John", "Jane"]
