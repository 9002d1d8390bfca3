from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable

from sqlalchemy.ext.asyncio import AsyncSession


class SessionScopedRepo:
    """
    Shared session handling for SQLAlchemy repositories.

    A unit of work injects `session` so every repository shares its transaction.
    Outside a unit of work each call opens its own session from `session_factory`.
    """

    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            # Session injected by UoW - use directly (no context manager needed)
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    async def _save(self, session: AsyncSession) -> None:
        """Flush inside a unit of work (it commits), commit when standalone."""
        if self.session is not None:
            await session.flush()
        else:
            await session.commit()
