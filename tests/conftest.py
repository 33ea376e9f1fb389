"""Shared pytest fixtures for sqltag unit and integration tests."""
from __future__ import annotations

import pytest

from sqltag.config import TagConfig
from sqltag.dialects import Dialect, DialectFactory
from sqltag.tag import Query, SqlTag
from sqltag.trace import clear_trace_sink, set_trace_sink


@pytest.fixture()
def pg() -> SqlTag:
    """PostgreSQL tag with tracing off."""
    return SqlTag(TagConfig(dialect="postgres", trace=False))


@pytest.fixture()
def sq() -> SqlTag:
    """SQLite tag with tracing off."""
    return SqlTag(TagConfig(dialect="sqlite", trace=False))


@pytest.fixture()
def my() -> SqlTag:
    """MySQL tag with tracing off."""
    return SqlTag(TagConfig(dialect="mysql", trace=False))


@pytest.fixture()
def pg_dialect() -> Dialect:
    return DialectFactory.create("postgres")


@pytest.fixture()
def traced() -> list[Query]:
    """Collect every query passed to the trace sink during the test."""
    captured: list[Query] = []
    set_trace_sink(captured.append)
    yield captured
    clear_trace_sink()
