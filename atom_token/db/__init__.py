from atom_token.db.models import BaseModel, Token
from atom_token.db.session import Database
from atom_token.db.services import SASessionUOW
from atom_token.db.repositories import TokenRepository, is_duplicate_key

__all__ = (
    "BaseModel",
    "Token",
    "Database",
    "SASessionUOW",
    "TokenRepository",
    "is_duplicate_key",
)
