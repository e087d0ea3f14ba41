import logging
import secrets
from typing import Callable, TypeAlias

from sqlalchemy.exc import SQLAlchemyError

from atom_token.constants import MAX_STORE_INT, TOKEN_ALPHABET
from atom_token.db.models import Token
from atom_token.db.repositories import TokenRepository
from atom_token.db.services import SASessionUOW
from atom_token.db.session import Database
from atom_token.exceptions import DuplicateTokenError, TokenNotFoundError, TokenStoreError
from atom_token.settings import AppSettings
from atom_token.utils import unix_now

__all__ = ("TokenManager", "generate_token_id")
logger = logging.getLogger(__name__)
IDGenerator: TypeAlias = Callable[[int], str]
# driver-level failures (e.g. refused connection) are not wrapped by SQLAlchemy
STORE_ERRORS = (SQLAlchemyError, OSError)


def generate_token_id(length: int) -> str:
    """Random alphanumeric string (each char is chosen uniformly from [A-Za-z0-9])"""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def _store_error(exc: SQLAlchemyError | OSError) -> TokenStoreError:
    # `orig` keeps the driver's message without SQLAlchemy's statement dump
    reason = str(getattr(exc, "orig", None) or exc)
    return TokenStoreError(reason)


class TokenManager:
    """
    Token lifecycle: issues, finds, lists, relabels and removes tokens.
    Each operation is a single store round-trip in its own session.
    """

    def __init__(
        self,
        database: Database,
        settings: AppSettings,
        generate_id: IDGenerator = generate_token_id,
    ) -> None:
        self._database = database
        self._token_length = settings.token_length
        self._page_size = settings.page_size
        self._max_attempts = settings.token_create_max_attempts
        self._generate_id = generate_id

    @property
    def page_size(self) -> int:
        return self._page_size

    def _uow(self) -> SASessionUOW:
        return SASessionUOW(session_factory=self._database.session_factory)

    async def create(self, user_id: int, label: str) -> str:
        """
        Issues a new token for the user.
        A candidate which collides with an existing ID is discarded and a new one is generated.

        :raises TokenStoreError: storage failed (or collisions exceeded configured attempts)
        """
        attempt = 0
        while True:
            attempt += 1
            token = Token(
                id=self._generate_id(self._token_length),
                user_id=user_id,
                created=unix_now(),
                label=label,
            )
            try:
                async with self._uow() as uow:
                    await TokenRepository(session=uow.session).insert(token)
                    uow.mark_for_commit()

            except DuplicateTokenError:
                logger.warning("[tokens] Generated token collided (attempt %i). Retrying", attempt)
                if self._max_attempts is not None and attempt >= self._max_attempts:
                    raise TokenStoreError(
                        f"unable to generate unique token after {attempt} attempts"
                    )
                continue

            except STORE_ERRORS as exc:
                logger.error("[tokens] Unable to create token for user %i: %r", user_id, exc)
                raise _store_error(exc) from exc

            logger.info("[tokens] Created token for user %i", user_id)
            return token.id

    async def get(self, token_id: str) -> Token:
        """
        :raises TokenNotFoundError: unknown token
        :raises TokenStoreError: storage failed
        """
        try:
            async with self._uow() as uow:
                token = await TokenRepository(session=uow.session).find_by_id(token_id)
        except STORE_ERRORS as exc:
            raise _store_error(exc) from exc

        if token is None:
            raise TokenNotFoundError()

        return token

    async def list(self, user_id: int, page: int = 0) -> list[Token]:
        """Zero-indexed page of user's tokens (empty list for pages past the end)"""
        if page < 0:
            raise ValueError(f"Page must be non-negative, got {page}")

        skip = page * self._page_size
        if skip > MAX_STORE_INT:
            # OFFSET is a signed 64-bit integer: nothing can be stored that far
            return []

        try:
            async with self._uow() as uow:
                return await TokenRepository(session=uow.session).find_by_user(
                    user_id,
                    skip=skip,
                    limit=self._page_size,
                )
        except STORE_ERRORS as exc:
            raise _store_error(exc) from exc

    async def set_label(self, token_id: str, label: str) -> None:
        try:
            async with self._uow() as uow:
                matched = await TokenRepository(session=uow.session).update_label(token_id, label)
                uow.mark_for_commit()
        except STORE_ERRORS as exc:
            raise _store_error(exc) from exc

        if not matched:
            raise TokenNotFoundError()

        logger.info("[tokens] Token label updated")

    async def remove(self, token_id: str) -> None:
        try:
            async with self._uow() as uow:
                deleted = await TokenRepository(session=uow.session).delete(token_id)
                uow.mark_for_commit()
        except STORE_ERRORS as exc:
            raise _store_error(exc) from exc

        if not deleted:
            raise TokenNotFoundError()

        logger.info("[tokens] Token removed")
