"""
Unit of Work: shares one session across repositories and owns the commit boundary.
"""

from typing import Dict, Optional, Type, TypeVar
from loguru import logger
from sqlmodel.ext.asyncio.session import AsyncSession
from .base import BaseRepository

R = TypeVar("R", bound=BaseRepository)


class UnitOfWork:
    """Manages related repositories with a shared session and transaction commit/rollback."""

    def __init__(self, session: Optional[AsyncSession] = None):
        """Initialize UnitOfWork; session must be provided (e.g. UnitOfWork.from_session())."""
        if session is None:
            raise ValueError("Session must be provided. Use UnitOfWork.from_session() or pass session explicitly.")

        self.session = session
        self._repositories: Dict[Type[BaseRepository], BaseRepository] = {}

    @classmethod
    async def from_session(cls, session: AsyncSession) -> "UnitOfWork":
        """Create UnitOfWork from an existing session."""
        return cls(session=session)

    def get_repository(self, repo_class: Type[R]) -> R:
        """Get or create a repository instance bound to this session (cached per class)."""
        if repo_class not in self._repositories:
            self._repositories[repo_class] = repo_class(self.session)
        return self._repositories[repo_class]

    async def save_changes(self) -> None:
        """Commit every staged change; fail fast and roll back on the first error."""
        try:
            await self.session.commit()
        except Exception as e:
            logger.error(f"Unit of work commit failed: {str(e)}")
            await self.session.rollback()
            raise

    async def commit(self) -> None:
        """Alias of save_changes."""
        await self.save_changes()

    async def rollback(self) -> None:
        """Rollback all changes."""
        await self.session.rollback()

    async def flush(self) -> None:
        """Flush session (e.g. to get auto-increment IDs)."""
        await self.session.flush()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            await self.rollback()
        else:
            await self.save_changes()
