"""Unit tests for dialects, the dialect registry, TagConfig and utils."""
from __future__ import annotations

import pickle

import pytest
from pydantic import ValidationError

from sqltag.config import TagConfig
from sqltag.dialects import (
    Dialect,
    DialectFactory,
    MySQLDialect,
    PostgresDialect,
    SQLAlchemyDialect,
    SQLiteDialect,
    resolve_dialect,
)
from sqltag.errors import InvalidValueError, UnsupportedDialectError
from sqltag.tag import SqlTag
from sqltag.utils import UNSET, escape_identifier, extract_keys, filter_unset, merge_lists


def test_builtin_dialects_registered():
    assert DialectFactory.registered_names() == ["mysql", "postgres", "sqlalchemy", "sqlite"]
    assert isinstance(DialectFactory.create("postgres"), PostgresDialect)
    assert isinstance(DialectFactory.create("sqlite"), SQLiteDialect)
    assert isinstance(DialectFactory.create("mysql"), MySQLDialect)
    assert isinstance(DialectFactory.create("sqlalchemy"), SQLAlchemyDialect)


def test_unknown_dialect():
    with pytest.raises(UnsupportedDialectError) as exc_info:
        DialectFactory.create("oracle")
    assert exc_info.value.name == "oracle"
    assert "postgres" in exc_info.value.registered


@pytest.mark.parametrize(
    ("dialect", "expected"),
    [
        (PostgresDialect(), "$3"),
        (SQLiteDialect(), "?"),
        (MySQLDialect(), "%s"),
        (SQLAlchemyDialect(), ":p3"),
    ],
)
def test_param_placeholder(dialect, expected):
    assert dialect.param_placeholder(3) == expected


def test_resolve_dialect():
    assert resolve_dialect(None) == PostgresDialect()
    assert resolve_dialect("mysql") == MySQLDialect()
    lite = SQLiteDialect()
    assert resolve_dialect(lite) is lite


def test_custom_dialect_registration():
    class OracleDialect(Dialect):
        @property
        def dialect_name(self) -> str:
            return "oracle"

        def param_placeholder(self, index: int) -> str:
            return f":{index}"

        def quote_identifier(self, name: str) -> str:
            return '"' + name.replace('"', '""') + '"'

    DialectFactory.register_class("oracle", OracleDialect)
    try:
        tag = SqlTag(TagConfig(dialect="oracle", trace=False))
        q = tag("SELECT * FROM t WHERE id IN {}", [1, 2])
        assert q.text == "SELECT * FROM t WHERE id IN (:1, :2)"
    finally:
        DialectFactory.unregister("oracle")
    assert not DialectFactory.is_registered("oracle")


def test_create_returns_shared_instance():
    assert DialectFactory.create("sqlite") is DialectFactory.create("sqlite")


def test_register_rejects_non_dialect():
    with pytest.raises(InvalidValueError):
        DialectFactory.register_class("bogus", str)  # type: ignore[arg-type]
    assert not DialectFactory.is_registered("bogus")


def test_register_rejects_abstract_dialect():
    class HalfDialect(Dialect):
        def param_placeholder(self, index: int) -> str:
            return "?"

    with pytest.raises(InvalidValueError) as exc_info:
        DialectFactory.register("half")(HalfDialect)
    assert "quote_identifier" in str(exc_info.value)
    assert not DialectFactory.is_registered("half")


def test_register_rejects_empty_name():
    with pytest.raises(InvalidValueError):
        DialectFactory.register_class("", SQLiteDialect)


def test_reregistering_replaces_cached_instance():
    DialectFactory.register_class("lite", SQLiteDialect)
    try:
        first = DialectFactory.create("lite")
        DialectFactory.register_class("lite", MySQLDialect)
        assert isinstance(DialectFactory.create("lite"), MySQLDialect)
        assert first is not DialectFactory.create("lite")
    finally:
        DialectFactory.unregister("lite")


# ---------------------------------------------------------------------------
# escape_literal
# ---------------------------------------------------------------------------


def test_escape_literal_default_is_identity():
    assert PostgresDialect().escape_literal("LIKE 'a%' AND t::int") == "LIKE 'a%' AND t::int"
    assert SQLiteDialect().escape_literal("'50%'") == "'50%'"


def test_mysql_doubles_percent():
    assert MySQLDialect().escape_literal("DATE_FORMAT(d, '%Y')") == "DATE_FORMAT(d, '%%Y')"


def test_sqlalchemy_escapes_colons():
    assert SQLAlchemyDialect().escape_literal("x::int") == "x\\:\\:int"


# ---------------------------------------------------------------------------
# escape_identifier
# ---------------------------------------------------------------------------


def test_escape_identifier_default_postgres():
    assert escape_identifier("email") == '"email"'


def test_escape_identifier_doubles_quotes():
    assert escape_identifier('we"ird') == '"we""ird"'


def test_escape_identifier_mysql():
    assert escape_identifier("ta`ble", dialect="mysql") == "`ta``ble`"


def test_escape_identifier_mysql_percent():
    assert escape_identifier("pct%", dialect="mysql") == "`pct%%`"


@pytest.mark.parametrize("name", ["", None, 3])
def test_escape_identifier_rejects(name):
    with pytest.raises(InvalidValueError):
        escape_identifier(name)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# TagConfig
# ---------------------------------------------------------------------------


def test_config_defaults():
    cfg = TagConfig()
    assert cfg.dialect == "postgres"
    assert cfg.trace is True


def test_config_rejects_unknown_dialect():
    with pytest.raises(ValidationError):
        TagConfig(dialect="oracle-9000")


def test_config_forbids_extra_fields():
    with pytest.raises(ValidationError):
        TagConfig(dialekt="postgres")  # type: ignore[call-arg]


def test_config_is_frozen():
    cfg = TagConfig()
    with pytest.raises(ValidationError):
        cfg.trace = False  # type: ignore[misc]


def test_config_from_mapping():
    cfg = TagConfig.model_validate({"dialect": "sqlite", "trace": False})
    assert cfg.create_dialect() == SQLiteDialect()


# ---------------------------------------------------------------------------
# utils
# ---------------------------------------------------------------------------


def test_unset_is_singleton_and_falsy():
    assert repr(UNSET) == "UNSET"
    assert not UNSET
    assert type(UNSET)() is UNSET
    assert pickle.loads(pickle.dumps(UNSET)) is UNSET


def test_filter_unset():
    assert filter_unset({"a": 1, "b": UNSET, "c": None}) == {"a": 1, "c": None}


def test_extract_keys_first_seen_order():
    assert extract_keys([{"b": 1, "a": 2}, {"c": 3, "a": 4}]) == ["b", "a", "c"]


def test_merge_lists():
    assert merge_lists(["a", "b", "c"], ["1", "2"]) == ["a", "1", "b", "2", "c"]
    assert merge_lists(["a"], []) == ["a"]
