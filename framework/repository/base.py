"""
Repository abstract base class and generic implementation.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, List, Optional, Type, TypeVar, Union

from loguru import logger
from sqlalchemy.sql.elements import ClauseElement
from sqlmodel import SQLModel, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

T = TypeVar("T", bound=SQLModel)

# Either a column expression (Product.price > 10) or a plain callable.
Predicate = Union[ClauseElement, Callable[[T], bool]]


class IRepository(ABC, Generic[T]):
    """Repository interface; defines standard data access API."""

    @abstractmethod
    async def add(self, entity: T) -> T:
        """Stage a new entity."""
        pass

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Stage changes to an existing entity."""
        pass

    @abstractmethod
    async def get(self, id: int) -> Optional[T]:
        """Get entity by ID, None if absent."""
        pass

    @abstractmethod
    async def all(self) -> List[T]:
        """Get every entity."""
        pass

    @abstractmethod
    async def find(self, predicate: Predicate) -> List[T]:
        """Get entities matching a predicate."""
        pass

    @abstractmethod
    async def save_changes(self) -> None:
        """Commit staged changes."""
        pass


class BaseRepository(IRepository[T]):
    """Generic repository over a SQLModel session; subclasses override single operations."""

    def __init__(self, session: AsyncSession, model: Type[T]):
        """Initialize repository with session and model."""
        self.session = session
        self.model = model

    async def add(self, entity: T) -> T:
        """Stage an insert; the id is assigned on flush or commit."""
        self.session.add(entity)
        logger.debug(f"Staged insert of {self.model.__name__}")
        return entity

    async def update(self, entity: T) -> T:
        """
        Merge the caller's state into the stored entity.

        Raises:
            sqlalchemy.exc.NoResultFound: no row with entity.id exists
        """
        statement = select(self.model).where(self.model.id == entity.id)
        result = await self.session.exec(statement)
        stored = result.one()
        if stored is not entity:
            entity = await self.session.merge(entity)
        logger.debug(f"Staged update of {self.model.__name__} id={entity.id}")
        return entity

    async def get(self, id: int) -> Optional[T]:
        """Get entity by ID."""
        statement = select(self.model).where(self.model.id == id)
        result = await self.session.exec(statement)
        return result.first()

    async def all(self) -> List[T]:
        """Get all entities (unpaginated)."""
        result = await self.session.exec(select(self.model))
        return list(result.all())

    async def find(self, predicate: Predicate) -> List[T]:
        """
        Get entities matching predicate.

        Column expressions are translated into a WHERE clause; callables are
        evaluated in-process against every stored entity.
        """
        if isinstance(predicate, ClauseElement):
            result = await self.session.exec(select(self.model).where(predicate))
            return list(result.all())
        if callable(predicate):
            return [entity for entity in await self.all() if predicate(entity)]
        raise TypeError(f"Unsupported predicate type: {type(predicate).__name__}")

    async def save_changes(self) -> None:
        """Commit staged changes; on failure roll back and re-raise."""
        try:
            await self.session.commit()
        except Exception as e:
            logger.error(f"Commit failed for {self.model.__name__}: {str(e)}")
            await self.session.rollback()
            raise
        logger.debug(f"Committed changes for {self.model.__name__}")

    async def remove(self, entity: T) -> None:
        """Stage a delete."""
        await self.session.delete(entity)

    async def find_one(self, **filters: Any) -> Optional[T]:
        """Find one entity by filters (e.g. sku='W-1')."""
        result = await self.session.exec(self._filtered(**filters))
        return result.first()

    async def find_by(self, **filters: Any) -> List[T]:
        """Find entities by filters."""
        result = await self.session.exec(self._filtered(**filters))
        return list(result.all())

    async def count(self, predicate: Optional[ClauseElement] = None) -> int:
        """Count entities, optionally matching a column expression."""
        statement = select(func.count(self.model.id))
        if predicate is not None:
            statement = statement.where(predicate)
        result = await self.session.exec(statement)
        return result.one()

    def _filtered(self, **filters: Any):
        statement = select(self.model)
        for key, value in filters.items():
            if hasattr(self.model, key):
                statement = statement.where(getattr(self.model, key) == value)
        return statement
