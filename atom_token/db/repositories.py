"""DB-specific module that provides specific operations on the token storage."""

import logging
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from atom_token.db.models import BaseModel, Token
from atom_token.exceptions import DuplicateTokenError

__all__ = ("BaseRepository", "TokenRepository", "is_duplicate_key")
ModelT = TypeVar("ModelT", bound=BaseModel)
logger = logging.getLogger(__name__)

PG_UNIQUE_VIOLATION = "23505"
SQLITE_UNIQUE_VIOLATIONS = ("SQLITE_CONSTRAINT_PRIMARYKEY", "SQLITE_CONSTRAINT_UNIQUE")


def is_duplicate_key(exc: BaseException) -> bool:
    """
    Checks whether the store rejected a write because of a uniqueness constraint
    (not just any integrity problem like NOT NULL or FK violations).
    """
    if not isinstance(exc, IntegrityError):
        return False

    orig = exc.orig
    candidates = (orig, getattr(orig, "__cause__", None))
    for error in candidates:
        if error is None:
            continue
        if getattr(error, "sqlstate", None) == PG_UNIQUE_VIOLATION:
            return True
        if getattr(error, "pgcode", None) == PG_UNIQUE_VIOLATION:
            return True
        if getattr(error, "sqlite_errorname", None) in SQLITE_UNIQUE_VIOLATIONS:
            return True

    message = str(orig).lower()
    return "unique constraint" in message or "duplicate key" in message


class BaseRepository(Generic[ModelT]):
    """
    Base repository interface.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        self.session: AsyncSession = session

    async def first(self, instance_id: Any) -> ModelT | None:
        """Selects instance by provided ID"""
        statement = select(self.model).filter_by(id=instance_id)
        result = await self.session.execute(statement)
        return result.scalars().first()

    async def create(self, value: dict[str, Any]) -> None:
        """Inserts new row (errors are raised immediately, not on flush)"""
        logger.debug("[DB] Creating [%s]", self.model.__name__)
        await self.session.execute(insert(self.model).values(**value))

    async def update_by_id(self, instance_id: Any, **value: Any) -> int:
        """Updates row by ID. Returns count of matched rows."""
        statement = update(self.model).filter_by(id=instance_id).values(**value)
        result = await self.session.execute(statement)
        return result.rowcount

    async def delete_by_id(self, instance_id: Any) -> int:
        """Removes row by ID. Returns count of removed rows."""
        statement = delete(self.model).filter_by(id=instance_id)
        result = await self.session.execute(statement)
        return result.rowcount


class TokenRepository(BaseRepository[Token]):
    """Token's repository."""

    model = Token

    async def find_by_id(self, token_id: str) -> Token | None:
        return await self.first(token_id)

    async def find_by_user(self, user_id: int, skip: int, limit: int) -> list[Token]:
        """User's tokens (stable order: creation time then ID) sliced by skip/limit"""
        statement = (
            select(Token)
            .filter_by(user_id=user_id)
            .order_by(Token.created, Token.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update_label(self, token_id: str, label: str) -> int:
        return await self.update_by_id(token_id, label=label)

    async def delete(self, token_id: str) -> int:
        return await self.delete_by_id(token_id)

    async def insert(self, token: Token) -> None:
        """
        Inserts token.

        :raises DuplicateTokenError: token's ID is already taken
        :raises SQLAlchemyError: any other storage problem
        """
        value = {
            "id": token.id,
            "user_id": token.user_id,
            "created": token.created,
            "label": token.label,
        }
        try:
            await self.create(value)
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateTokenError(token.id) from exc
            raise
