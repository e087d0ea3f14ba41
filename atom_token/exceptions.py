import logging

from fastapi import status

from atom_token.constants import NOT_FOUND_REASON


class BaseApplicationError(Exception):
    """Base application error"""

    log_level: int = logging.ERROR
    log_message: str = "Application error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AppSettingsError(BaseApplicationError):
    """Settings error"""


class TokenError(BaseApplicationError):
    """Token error"""


class TokenNotFoundError(TokenError):
    """Requested token does not exist"""

    log_level: int = logging.WARNING
    log_message: str = "Token lookup error"
    status_code: int = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = NOT_FOUND_REASON) -> None:
        super().__init__(message)


class TokenStoreError(TokenError):
    """Any failure reported by the token storage"""

    log_level: int = logging.ERROR
    log_message: str = "Token store error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR


class DuplicateTokenError(Exception):
    """Storage rejected a token because its ID is already taken (never leaves the service)"""

    def __init__(self, token_id: str) -> None:
        super().__init__(f"duplicate token id '{token_id[:4]}...'")
        self.token_id = token_id
