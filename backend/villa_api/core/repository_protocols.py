"""Boundary Protocols — contracts between the resource handler and storage.

Invariants:
    - Handlers never import a concrete repository; they receive one by injection
    - get() returns at most one entity; when several match, the first in key order wins
    - create() does not pre-check the key; callers check with get() first and storage
      uniqueness (ConflictError) is the backstop for concurrent inserts
    - update()/remove() identify the row by natural key and raise ResourceNotFoundError
      when it is absent

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Predicate is a SQLAlchemy boolean expression: composable filters without a query language;
      only the expression type is imported, never an engine or session
"""

from datetime import datetime
from typing import Protocol, TypeVar

from sqlalchemy import ColumnElement

T = TypeVar("T")


class VillaNumberLike(Protocol):
    """Structural contract for villa number entities passed between handler and storage.

    Keeps the handler decoupled from the ORM model while giving mypy
    real type information.
    """
    villa_no: int
    special_details: str | None
    created_at: datetime
    updated_at: datetime


class Repository(Protocol[T]):
    """Generic data-access contract over one entity kind."""
    async def get_all(self) -> list[T]: ...
    async def get(self, filter: ColumnElement[bool] | None = None) -> T | None: ...
    async def create(self, entity: T) -> T: ...
    async def update(self, entity: T) -> None: ...
    async def remove(self, entity: T) -> None: ...


class VillaNumberRepository(Repository[VillaNumberLike], Protocol):
    """Contract for villa number persistence, implemented in repositories/."""
