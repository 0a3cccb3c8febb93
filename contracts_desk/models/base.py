"""Shared SQLAlchemy base and identity helpers for the contract schema."""

from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.orm import DeclarativeBase

# Identity of a row that exists only in memory.
NEW_IDENTITY = 0


class Base(DeclarativeBase):
    """Declarative base class for the contract schema.

    Subclasses with a store-generated key name it in ``__identity__``; new
    instances start with that attribute set to ``NEW_IDENTITY``.
    """

    __identity__: str | None = None

    @property
    def identity(self) -> int | None:
        name = type(self).__identity__
        return getattr(self, name) if name else None

    @property
    def is_new(self) -> bool:
        return type(self).__identity__ is not None and self.identity in (None, NEW_IDENTITY)


@event.listens_for(Base, "init", propagate=True)
def _default_new_identity(target: Base, args: tuple, kwargs: dict[str, Any]) -> None:
    name = type(target).__identity__
    if name:
        kwargs.setdefault(name, NEW_IDENTITY)


def clear_new_identities(objects) -> None:
    """Turn ``NEW_IDENTITY`` keys into NULL so the store generates them on insert."""
    for obj in objects:
        name = getattr(type(obj), "__identity__", None)
        if name and getattr(obj, name) == NEW_IDENTITY:
            setattr(obj, name, None)
