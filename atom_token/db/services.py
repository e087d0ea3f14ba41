import logging
from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from atom_token.db.session import sm_type

logger = logging.getLogger(__name__)


class SASessionUOW:
    """Unit Of Work around SQLAlchemy-session related items: repositories, ops"""

    def __init__(self, session_factory: sm_type) -> None:
        self.__session: AsyncSession = session_factory()
        self.__need_to_commit: bool = False

    async def __aenter__(self) -> Self:
        logger.debug("[DB] Entering to the transaction block")
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            if exc_type is not None:
                logger.debug("[DB] Rolling back transaction: %r", exc_val)
                await self.__session.rollback()
            elif self.__need_to_commit:
                await self.commit()
        finally:
            await self.__session.close()

    @property
    def session(self) -> AsyncSession:
        return self.__session

    async def commit(self) -> None:
        """Sending changes to the database."""
        try:
            logger.debug("[DB] Committing changes...")
            await self.session.commit()
        except Exception as exc:
            logger.error("[DB] Failed to commit changes", exc_info=exc)
            await self.session.rollback()
            raise exc
        else:
            logger.debug("[DB] Committed changes")

    def mark_for_commit(self) -> None:
        self.__need_to_commit = True

    @property
    def need_to_commit(self) -> bool:
        return self.__need_to_commit
