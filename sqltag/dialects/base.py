"""Dialect abstraction: placeholder syntax and identifier quoting.

Builders never hard-code ``$1`` or ``"column"``; they ask the ``Dialect``
they are built with.  ``PostgresDialect``, ``SQLiteDialect``,
``MySQLDialect`` and ``SQLAlchemyDialect`` override the two
dialect-specific steps.
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class Dialect(ABC):
    """Abstract base for SQL dialects.

    Placeholders are always positional: the ``index`` passed to
    :meth:`param_placeholder` is the 1-based position of the value in the
    query's ``values`` sequence.  Dialects whose native syntax is not
    numbered (``?``, ``%s``) still line up, because values are consumed in
    the same left-to-right order their placeholders appear in the text.
    """

    @abstractmethod
    def param_placeholder(self, index: int) -> str:
        """Return the SQL placeholder for the parameter at ``index``.

        Args:
            index: 1-based parameter position.

        Returns:
            Dialect-specific placeholder string.
        """

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Return a properly-quoted SQL identifier.

        Args:
            name: Unquoted identifier (table or column name).

        Returns:
            Quoted identifier.
        """

    def escape_literal(self, text: str) -> str:
        """Escape literal SQL text so the driver passes it through unchanged.

        Applied to template segments and raw fragments, never to values.
        Most drivers leave SQL text alone, so the default is the identity.
        """
        return text

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name (e.g. ``'postgres'``)."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Dialect) and other.dialect_name == self.dialect_name

    def __hash__(self) -> int:
        return hash(self.dialect_name)
