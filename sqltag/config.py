"""Pydantic model for the configuration bound to a :class:`~sqltag.tag.SqlTag`.

Create one per target backend and hand it to the tag::

    from sqltag import SqlTag, TagConfig

    sql = SqlTag(TagConfig(dialect="sqlite", trace=False))
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from sqltag.dialects.base import Dialect
from sqltag.dialects.registry import DEFAULT_DIALECT, DialectFactory


class TagConfig(BaseModel):
    """Settings for one template tag.

    Attributes:
        dialect: Registered dialect name controlling placeholder syntax and
            identifier quoting (``'postgres'``, ``'sqlite'``, ``'mysql'`` or
            ``'sqlalchemy'``).
        trace: Emit a trace record for every query the tag builds.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    dialect: str = DEFAULT_DIALECT
    trace: bool = True

    @field_validator("dialect")
    @classmethod
    def _check_dialect(cls, value: str) -> str:
        if not DialectFactory.is_registered(value):
            registered = DialectFactory.registered_names()
            raise ValueError(
                f"Unsupported dialect: '{value}'. Registered dialects: {registered}."
            )
        return value

    def create_dialect(self) -> Dialect:
        """Return the :class:`Dialect` registered as :attr:`dialect`."""
        return DialectFactory.create(self.dialect)
