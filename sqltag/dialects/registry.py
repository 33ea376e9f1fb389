"""Name → dialect lookup.

Dialects are stateless, so the registry hands out one shared instance per
name.  ``TagConfig``, ``escape_identifier`` and ``serialize`` all resolve
dialect names here.  A third-party dialect only has to register itself::

    from sqltag.dialects import Dialect, DialectFactory

    @DialectFactory.register("oracle")
    class OracleDialect(Dialect):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from sqltag.dialects.base import Dialect
from sqltag.errors import InvalidValueError, UnsupportedDialectError

#: Dialect used whenever none is given explicitly.
DEFAULT_DIALECT = "postgres"


class DialectFactory:
    """Registry of :class:`Dialect` classes, keyed by name."""

    _dialects: ClassVar[dict[str, type[Dialect]]] = {}
    _instances: ClassVar[dict[str, Dialect]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[Dialect]], type[Dialect]]:
        """Class decorator form of :meth:`register_class`."""

        def decorator(dialect_cls: type[Dialect]) -> type[Dialect]:
            cls.register_class(name, dialect_cls)
            return dialect_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, dialect_cls: type[Dialect]) -> None:
        """Register ``dialect_cls`` under ``name``, replacing any previous entry.

        Raises:
            InvalidValueError: If ``name`` is empty or ``dialect_cls`` is not a
                concrete :class:`Dialect` subclass.
        """
        if not isinstance(name, str) or not name:
            raise InvalidValueError(f"Dialect name must be a non-empty string, got {name!r}.")
        if not (isinstance(dialect_cls, type) and issubclass(dialect_cls, Dialect)):
            raise InvalidValueError(f"{dialect_cls!r} is not a Dialect subclass.")
        if getattr(dialect_cls, "__abstractmethods__", None):
            missing = sorted(dialect_cls.__abstractmethods__)
            raise InvalidValueError(
                f"{dialect_cls.__name__} does not implement {missing}."
            )
        cls._dialects[name] = dialect_cls
        cls._instances.pop(name, None)

    @classmethod
    def unregister(cls, name: str) -> None:
        """Forget ``name``.  Unknown names are ignored."""
        cls._dialects.pop(name, None)
        cls._instances.pop(name, None)

    @classmethod
    def create(cls, name: str) -> Dialect:
        """Return the shared instance of the dialect registered as ``name``.

        Raises:
            UnsupportedDialectError: If nothing is registered under ``name``.
        """
        dialect = cls._instances.get(name)
        if dialect is None:
            dialect_cls = cls._dialects.get(name)
            if dialect_cls is None:
                raise UnsupportedDialectError(name, cls.registered_names())
            dialect = cls._instances[name] = dialect_cls()
        return dialect

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._dialects

    @classmethod
    def registered_names(cls) -> list[str]:
        return sorted(cls._dialects)


def resolve_dialect(dialect: Dialect | str | None) -> Dialect:
    """Return a :class:`Dialect` instance for a name, an instance or ``None``."""
    if dialect is None:
        return DialectFactory.create(DEFAULT_DIALECT)
    if isinstance(dialect, Dialect):
        return dialect
    return DialectFactory.create(dialect)
