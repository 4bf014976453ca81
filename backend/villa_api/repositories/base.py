"""Generic SQLAlchemy Repository — CRUD over one mapped model keyed by its primary key.

Invariants:
    - get_all() and get() order by the natural key, so "first match" is deterministic
    - create() never pre-checks: a duplicate key is reported by the database and
      re-raised as ConflictError after rollback
    - update() copies every non-key, non-audit column and refreshes updated_at
    - update()/remove() raise ResourceNotFoundError for unknown keys
    - Every mutating call commits; a failed commit is rolled back before raising

Design Decisions:
    - Key and mutable columns derived from the mapper: subclasses only declare model
      and resource_name
    - Failures mapped with as_database_error here, because the handler boundary catches
      them before they would reach DatabaseSessionManager.session()
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Generic, TypeVar

from sqlalchemy import ColumnElement, inspect, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from villa_api.core.errors import (
    ConflictError, ErrorContext, ResourceNotFoundError,
)
from villa_api.db.base import AUDIT_COLUMNS, Base, utcnow
from villa_api.infrastructure.database import as_database_error

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class SqlAlchemyRepository(Generic[ModelT]):
    """CRUD repository for a model with a single-column natural key."""

    model: type[ModelT]
    resource_name: str

    def __init__(self, db: AsyncSession):
        self.db = db
        mapper = inspect(self.model)
        self._key_column = mapper.primary_key[0]
        self._key_attr = mapper.get_property_by_column(self._key_column).key
        self._mutable_attrs = [
            prop.key for prop in mapper.column_attrs
            if prop.key != self._key_attr and prop.key not in AUDIT_COLUMNS
        ]
        self._audit_attrs = [
            prop.key for prop in mapper.column_attrs if prop.key in AUDIT_COLUMNS
        ]

    async def get_all(self) -> list[ModelT]:
        async with self._storage_errors("query"):
            result = await self.db.execute(
                select(self.model).order_by(self._key_column),
            )
            return list(result.scalars().all())

    async def get(
        self, filter: ColumnElement[bool] | None = None,
    ) -> ModelT | None:
        query = select(self.model).order_by(self._key_column).limit(1)
        if filter is not None:
            query = query.where(filter)
        async with self._storage_errors("query"):
            result = await self.db.execute(query)
            return result.scalars().first()

    async def create(self, entity: ModelT) -> ModelT:
        key = self._key_of(entity)
        now = utcnow()
        for name in self._audit_attrs:
            setattr(entity, name, now)
        self.db.add(entity)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            conflict = ConflictError(
                self.resource_name, str(key), ErrorContext(operation="create"),
            )
            logger.warning(
                f"{self.resource_name} {key} rejected by storage: duplicate key",
                extra=conflict.log_extra(),
            )
            raise conflict from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise as_database_error(e, "commit") from e
        return entity

    async def update(self, entity: ModelT) -> None:
        key = self._key_of(entity)
        async with self._storage_errors("update"):
            existing = await self.db.get(self.model, key)
            if existing is None:
                raise ResourceNotFoundError(
                    self.resource_name, str(key), ErrorContext(operation="update"),
                )
            if existing is not entity:
                for name in self._mutable_attrs:
                    setattr(existing, name, getattr(entity, name))
            if "updated_at" in self._audit_attrs:
                existing.updated_at = utcnow()
            await self.db.commit()
        if existing is not entity:
            for name in self._audit_attrs:
                setattr(entity, name, getattr(existing, name))

    async def remove(self, entity: ModelT) -> None:
        key = self._key_of(entity)
        async with self._storage_errors("delete"):
            existing = await self.db.get(self.model, key)
            if existing is None:
                raise ResourceNotFoundError(
                    self.resource_name, str(key), ErrorContext(operation="delete"),
                )
            await self.db.delete(existing)
            await self.db.commit()

    def _key_of(self, entity: ModelT) -> Any:
        return getattr(entity, self._key_attr)

    @asynccontextmanager
    async def _storage_errors(self, operation: str) -> AsyncGenerator[None, None]:
        """Roll back and re-raise SQLAlchemy failures as DatabaseError."""
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise as_database_error(e, operation) from e
