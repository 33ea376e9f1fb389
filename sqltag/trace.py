"""Diagnostic tracing of built queries.

Every query the tag builds is logged at DEBUG level on the ``sqltag.query``
logger, and handed to an optional process-wide sink::

    import sqltag

    captured = []
    sqltag.set_trace_sink(captured.append)
    ...
    sqltag.clear_trace_sink()

Tracing is fire-and-forget: a failing sink is logged and otherwise ignored,
so it can never change or prevent the query being returned.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqltag.tag import Query

#: A callable receiving one query per build.
TraceSink = Callable[["Query"], object]

logger = logging.getLogger(__name__)
query_logger = logging.getLogger("sqltag.query")

_sink: TraceSink | None = None


def set_trace_sink(sink: TraceSink | None) -> None:
    """Install ``sink`` as the process-wide trace sink (``None`` removes it)."""
    global _sink
    if sink is not None and not callable(sink):
        raise TypeError(f"Trace sink must be callable, got {type(sink).__name__}.")
    _sink = sink


def clear_trace_sink() -> None:
    set_trace_sink(None)


def get_trace_sink() -> TraceSink | None:
    return _sink


def emit(query: Query) -> None:
    """Record ``query`` on the query logger and the installed sink."""
    if query_logger.isEnabledFor(logging.DEBUG):
        query_logger.debug("text=%r values=%r", query.text, query.values)

    sink = _sink
    if sink is None:
        return
    try:
        sink(query)
    except Exception:
        logger.warning("Trace sink %r raised; ignoring.", sink, exc_info=True)
