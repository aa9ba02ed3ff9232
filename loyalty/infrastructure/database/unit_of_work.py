"""Transactional unit of work over an async SQLAlchemy session."""

from __future__ import annotations

from types import TracebackType

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from loyalty.infrastructure.database.repositories import SqlAccountRepository, SqlTransferRepository


class SqlUnitOfWork:
    """One session, one transaction.

    Commits when the block exits cleanly and rolls back otherwise, so a
    failure midway through a confirmation leaves no partial writes behind.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("unit of work is not active")
        return self._session

    async def __aenter__(self) -> "SqlUnitOfWork":
        self._session = self._session_factory()
        self.accounts = SqlAccountRepository(self._session)
        self.transfers = SqlTransferRepository(self._session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        session = self.session
        try:
            if exc_type is None:
                await session.commit()
            else:
                await session.rollback()
        finally:
            await session.close()
            self._session = None


__all__ = ["SqlUnitOfWork"]
