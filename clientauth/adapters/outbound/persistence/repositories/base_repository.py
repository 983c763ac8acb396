# clientauth/adapters/outbound/persistence/repositories/base_repository.py

from typing import Any, AsyncIterator, Dict, Generic, List, Optional, Type, TypeVar
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from sqlalchemy.future import select
import logging

from clientauth.adapters.outbound.persistence.database import Base
from clientauth.domain.exceptions import (
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
    StorageFaultException
)

# Define generic type for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class AsyncCRUDBase(Generic[ModelType]):
    """
    Async base class for implementing the Repository pattern.

    Provides generic CRUD operations on rows addressed by key columns.
    Each public operation of a subclass opens its own session from the
    session factory. SQLAlchemy errors are translated to domain exceptions.

    Attributes:
        model: SQLAlchemy model class
        session_factory: Factory of async sessions
        logger: Configured logger for the class
    """

    def __init__(self, model: Type[ModelType], session_factory: async_sessionmaker):
        """
        Initialize the repository with an SQLAlchemy model.

        Args:
            model: SQLAlchemy model class associated with this repository
            session_factory: Factory producing the sessions used by each operation
        """
        self.model = model
        self.session_factory = session_factory
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as db:
            yield db

    def _where(self, query, filters: Dict[str, Any]):
        for field, value in filters.items():
            query = query.where(getattr(self.model, field) == value)
        return query

    async def get_by_keys(self, db: AsyncSession, **keys) -> Optional[ModelType]:
        """
        Get an entity by the value of its key columns.

        Args:
            db: Async database session
            **keys: Key columns in the format field=value

        Returns:
            Entity found or None if it doesn't exist

        Raises:
            StorageFaultException: If an error occurs in the query
        """
        try:
            result = await db.execute(self._where(select(self.model), keys))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching {self.model.__name__} with {keys}: {str(e)}")
            raise StorageFaultException(
                detail=f"Error fetching {self.model.__name__}",
                original_error=e
            )

    async def get_multi(self, db: AsyncSession, **filters) -> List[ModelType]:
        """
        Get every entity matching the equality filters, in insertion order.

        Raises:
            StorageFaultException: If an error occurs in the query
        """
        try:
            query = self._where(select(self.model), filters).order_by(self.model.id)
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing {self.model.__name__}s: {str(e)}")
            raise StorageFaultException(
                detail=f"Error listing {self.model.__name__}s",
                original_error=e
            )

    async def insert(self, db: AsyncSession, db_obj: ModelType, resource_id: Any = None) -> ModelType:
        """
        Persist a new entity.

        Args:
            db: Async database session
            db_obj: Model instance to add
            resource_id: Identifier reported when the entity already exists

        Returns:
            Newly created entity

        Raises:
            ResourceAlreadyExistsException: If the entity already exists
            StorageFaultException: If another database error occurs
        """
        try:
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)

            self.logger.info(f"{self.model.__name__} created with ID: {db_obj.id}")
            return db_obj

        except IntegrityError as e:
            await db.rollback()
            error_msg = str(e).lower()
            if 'unique' in error_msg or 'duplicate' in error_msg:
                self.logger.warning(f"Attempt to create duplicate {self.model.__name__}: {resource_id}")
                raise ResourceAlreadyExistsException(
                    detail=f"{self.model.__name__} already exists",
                    resource_id=resource_id
                )
            self.logger.error(f"Integrity error creating {self.model.__name__}: {str(e)}")
            raise StorageFaultException(original_error=e)

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            raise StorageFaultException(
                detail=f"Error creating {self.model.__name__}",
                original_error=e
            )

    async def apply(self, db: AsyncSession, db_obj: ModelType, data: Dict[str, Any]) -> ModelType:
        """
        Update an existing entity with the given column values.

        Raises:
            StorageFaultException: If a database error occurs
        """
        try:
            for field, value in data.items():
                setattr(db_obj, field, value)

            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)

            self.logger.info(f"{self.model.__name__} with ID {db_obj.id} updated")
            return db_obj

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error updating {self.model.__name__}: {str(e)}")
            raise StorageFaultException(
                detail=f"Error updating {self.model.__name__}",
                original_error=e
            )

    async def remove(self, db: AsyncSession, resource_id: Any = None, **keys) -> ModelType:
        """
        Remove an entity by its key columns.

        Args:
            db: Async database session
            resource_id: Identifier reported when the entity is missing
            **keys: Key columns in the format field=value

        Returns:
            Removed entity

        Raises:
            ResourceNotFoundException: If the entity doesn't exist
            StorageFaultException: If an error occurs during removal
        """
        obj = await self.get_by_keys(db, **keys)
        if not obj:
            raise ResourceNotFoundException(
                detail=f"{self.model.__name__} not found",
                resource_id=resource_id
            )

        try:
            await db.delete(obj)
            await db.commit()

            self.logger.info(f"{self.model.__name__} with ID {obj.id} removed")
            return obj

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error removing {self.model.__name__}: {str(e)}")
            raise StorageFaultException(
                detail=f"Error removing {self.model.__name__}",
                original_error=e
            )
