"""
Base repository with common CRUD operations.
Implements the Repository pattern for data access abstraction.
"""
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from watchstore.core.database import Base
from watchstore.core.errors import ConflictError, StoreError
from watchstore.core.logging import get_logger

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """
    Translate SQLAlchemy failures into the service error taxonomy.

    A failed version check or unique constraint becomes ConflictError;
    anything else the driver raises becomes StoreError.
    """
    try:
        yield
    except StaleDataError as e:
        logger.warning("Concurrent modification detected", operation=operation)
        raise ConflictError("Resource was modified concurrently, reload and retry") from e
    except IntegrityError as e:
        logger.warning("Integrity violation", operation=operation, error=str(e.orig))
        raise ConflictError("Resource conflicts with existing data") from e
    except SQLAlchemyError as e:
        logger.error("Database operation failed", operation=operation, error=str(e))
        raise StoreError("Database operation failed") from e


class BaseRepository(Generic[ModelType]):
    """
    Generic repository providing common database operations.

    Subclasses should set the `model` class attribute to the SQLAlchemy model.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a single record by its primary key."""
        with store_errors(f"get {self.model.__tablename__}"):
            return await self.session.get(self.model, id)

    async def create(self, obj_in: dict[str, Any]) -> ModelType:
        """Create a new record and re-read it so database defaults are visible."""
        db_obj = self.model(**obj_in)
        self.session.add(db_obj)
        with store_errors(f"create {self.model.__tablename__}"):
            await self.session.flush()
            await self.session.refresh(db_obj)
        return db_obj

    async def save(self, db_obj: ModelType) -> ModelType:
        """Flush pending attribute changes of a loaded record."""
        with store_errors(f"update {self.model.__tablename__}"):
            await self.session.flush()
            await self.session.refresh(db_obj)
        return db_obj

    async def delete(self, db_obj: ModelType) -> None:
        """Delete a record."""
        with store_errors(f"delete {self.model.__tablename__}"):
            await self.session.delete(db_obj)
            await self.session.flush()
