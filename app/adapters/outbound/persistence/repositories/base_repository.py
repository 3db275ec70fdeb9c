# app/adapters/outbound/persistence/repositories/base_repository.py (async version)

import re
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Generic, List, Optional, Sequence, Type, TypeVar
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from sqlalchemy.future import select
from sqlalchemy.sql import ColumnElement
import logging

from app.adapters.outbound.persistence.models.base_model import Base
from app.domain.exceptions import (
    FieldError,
    ResourceAlreadyExistsException,
    DatabaseOperationException
)

# Define generic type for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)

# Common patterns for unique violations on different databases
CONSTRAINT_PATTERNS = (
    r'violates unique constraint "(.*?)"',
    r'constraint "(.*?)"',
    r'CONSTRAINT `(.*?)`',
    r'UNIQUE constraint failed: (.*)',
)


def extract_constraint_name(error_message: str) -> Optional[str]:
    """
    Attempt to extract the constraint name from an integrity error message.

    Args:
        error_message: The complete error message

    Returns:
        The constraint name (or failed column list) or None if not found
    """
    for pattern in CONSTRAINT_PATTERNS:
        match = re.search(pattern, error_message)
        if match:
            return match.group(1)
    return None


class AsyncCRUDBase(Generic[ModelType]):
    """
    Async base class for implementing the Repository pattern.

    Provides generic CRUD operations with consistent error handling and
    logging. Every operation runs in its own session, so independent
    operations can be awaited concurrently. Models with a 'deleted_at'
    column only expose rows where it is unset.

    Attributes:
        model: SQLAlchemy model class
        session_factory: Factory of AsyncSession
        unique_fields: Columns covered by unique constraints, mapped to the
            message reported when a write violates them
    """

    unique_fields: Dict[str, str] = {}

    def __init__(self, model: Type[ModelType], session_factory: async_sessionmaker):
        """
        Initialize the repository with an SQLAlchemy model.

        Args:
            model: SQLAlchemy model class associated with this repository
            session_factory: Factory producing AsyncSession instances
        """
        self.model = model
        self.session_factory = session_factory
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.session_factory() as db:
            yield db

    def active_clauses(self) -> List[ColumnElement]:
        if hasattr(self.model, "deleted_at"):
            return [self.model.deleted_at.is_(None)]
        return []

    async def get(self, id: Any) -> Optional[ModelType]:
        """
        Get an entity by ID.

        Args:
            id: ID of the entity

        Returns:
            Entity found or None if it doesn't exist
        """
        return await self.get_by_field("id", id)

    async def get_by_field(self, field_name: str, value: Any) -> Optional[ModelType]:
        """
        Get an entity by the value of a specific field.

        Args:
            field_name: Name of the field/column to filter
            value: Value to filter

        Returns:
            Entity found or None if it doesn't exist

        Raises:
            DatabaseOperationException: If an error occurs in the query
        """
        try:
            query = select(self.model).where(getattr(self.model, field_name) == value, *self.active_clauses())
            async with self.session() as db:
                result = await db.execute(query.limit(1))
                return result.scalars().first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching {self.model.__name__} with {field_name}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error fetching {self.model.__name__} by {field_name}",
                original_error=e
            )

    async def get_multi(
            self,
            *,
            where: Sequence[ColumnElement] = (),
            order_by: Sequence[ColumnElement] = (),
            skip: int = 0,
            limit: int = 100,
    ) -> List[ModelType]:
        """
        Get multiple entities with pagination, ordering and filter clauses.

        Raises:
            DatabaseOperationException: If an error occurs in the query
        """
        try:
            query = (
                select(self.model)
                .where(*self.active_clauses(), *where)
                .order_by(*order_by)
                .offset(skip)
                .limit(limit)
            )
            async with self.session() as db:
                result = await db.execute(query)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing {self.model.__name__}s: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error listing {self.model.__name__}s",
                original_error=e
            )

    async def count(self, *, where: Sequence[ColumnElement] = ()) -> int:
        """
        Count the entities matching the filter clauses.

        Raises:
            DatabaseOperationException: If an error occurs in the query
        """
        try:
            query = select(func.count()).select_from(self.model).where(*self.active_clauses(), *where)
            async with self.session() as db:
                result = await db.execute(query)
                return int(result.scalar_one())
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting {self.model.__name__}s: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error counting {self.model.__name__}s",
                original_error=e
            )

    def _conflict_errors(self, error: IntegrityError) -> List[FieldError]:
        """Map a unique violation to the field errors of the columns involved."""
        message = str(error.orig) if error.orig is not None else str(error)
        constraint = extract_constraint_name(message) or message
        return [
            FieldError(field, conflict_message)
            for field, conflict_message in self.unique_fields.items()
            if field in constraint
        ]

    def _handle_integrity_error(self, error: IntegrityError, action: str) -> None:
        message = str(error).lower()
        if 'unique' in message or 'duplicate' in message:
            self.logger.warning(f"Uniqueness violation on {action} {self.model.__name__}: {str(error)}")
            raise ResourceAlreadyExistsException(
                detail=f"{self.model.__name__} with these data already exists",
                errors=self._conflict_errors(error),
            )
        self.logger.error(f"Integrity error on {action} {self.model.__name__}: {str(error)}")
        raise DatabaseOperationException(original_error=error)

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new entity.

        Args:
            obj_in: Column values of the new entity

        Returns:
            Newly created entity

        Raises:
            ResourceAlreadyExistsException: If a unique constraint is violated
            DatabaseOperationException: If another database error occurs
        """
        async with self.session() as db:
            try:
                db_obj = self.model(**obj_in)
                db.add(db_obj)
                await db.commit()
                await db.refresh(db_obj)

                self.logger.info(f"{self.model.__name__} created with ID: {db_obj.id}")
                return db_obj

            except IntegrityError as e:
                await db.rollback()
                self._handle_integrity_error(e, "create")

            except SQLAlchemyError as e:
                await db.rollback()
                self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
                raise DatabaseOperationException(
                    detail=f"Error creating {self.model.__name__}",
                    original_error=e
                )

    async def update(self, id: Any, obj_in: Dict[str, Any]) -> Optional[ModelType]:
        """
        Update the given columns of an existing entity.

        Args:
            id: ID of the entity
            obj_in: Columns to change

        Returns:
            Updated entity, or None if it doesn't exist

        Raises:
            ResourceAlreadyExistsException: If the update violates a uniqueness constraint
            DatabaseOperationException: If another database error occurs
        """
        async with self.session() as db:
            try:
                query = select(self.model).where(self.model.id == id, *self.active_clauses())
                db_obj = (await db.execute(query)).scalars().first()
                if db_obj is None:
                    return None

                for field, value in obj_in.items():
                    if hasattr(db_obj, field):
                        setattr(db_obj, field, value)

                await db.commit()
                await db.refresh(db_obj)

                self.logger.info(f"{self.model.__name__} with ID {db_obj.id} updated")
                return db_obj

            except IntegrityError as e:
                await db.rollback()
                self._handle_integrity_error(e, "update")

            except SQLAlchemyError as e:
                await db.rollback()
                self.logger.error(f"Error updating {self.model.__name__}: {str(e)}")
                raise DatabaseOperationException(
                    detail=f"Error updating {self.model.__name__}",
                    original_error=e
                )

    async def remove(self, id: Any) -> bool:
        """
        Remove an entity by ID (hard delete).

        Returns:
            True if a row was removed

        Raises:
            DatabaseOperationException: If an error occurs during removal
        """
        async with self.session() as db:
            try:
                query = select(self.model).where(self.model.id == id)
                obj = (await db.execute(query)).scalars().first()
                if obj is None:
                    return False

                await db.delete(obj)
                await db.commit()

                self.logger.info(f"{self.model.__name__} with ID {id} removed")
                return True

            except SQLAlchemyError as e:
                await db.rollback()
                self.logger.error(f"Error removing {self.model.__name__}: {str(e)}")
                raise DatabaseOperationException(
                    detail=f"Error removing {self.model.__name__}",
                    original_error=e
                )
