from datetime import datetime
from typing import Annotated, Literal, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from atom_token.constants import MAX_STORE_INT, MAX_USER_ID

if TYPE_CHECKING:
    from atom_token.db.models import Token

__all__ = (
    "CreateRequest",
    "CreatedResponse",
    "FindRequest",
    "FoundResponse",
    "ListRequest",
    "ListedToken",
    "ListResponse",
    "SetRequest",
    "SetResponse",
    "RemoveRequest",
    "RemovedResponse",
    "ErrorResponse",
    "HealthCheck",
)

UserID = Annotated[int, Field(alias="userID", ge=0, le=MAX_USER_ID, description="Token owner")]


class CreateRequest(BaseModel):
    """Issue a new token for the user"""

    model_config = ConfigDict(populate_by_name=True)

    user_id: UserID
    label: str


class CreatedResponse(BaseModel):
    type: Literal["created"] = "created"
    token: str


class FindRequest(BaseModel):
    token: str


class FoundResponse(BaseModel):
    type: Literal["found"] = "found"
    user_id: int
    label: str
    created: int

    @classmethod
    def from_token(cls, token: "Token") -> "FoundResponse":
        return cls(user_id=token.user_id, label=token.label, created=token.created)


class ListRequest(BaseModel):
    """Zero-indexed page of the user's tokens"""

    model_config = ConfigDict(populate_by_name=True)

    user_id: UserID
    page: int = Field(default=0, ge=0, le=MAX_STORE_INT)


class ListedToken(BaseModel):
    token: str
    created: int
    label: str

    @classmethod
    def from_token(cls, token: "Token") -> "ListedToken":
        return cls(token=token.id, created=token.created, label=token.label)


class ListResponse(BaseModel):
    type: Literal["list"] = "list"
    tokens: list[ListedToken] = Field(default_factory=list)


class SetRequest(BaseModel):
    token: str
    label: str


class SetResponse(BaseModel):
    type: Literal["set"] = "set"


class RemoveRequest(BaseModel):
    token: str


class RemovedResponse(BaseModel):
    type: Literal["removed"] = "removed"


class ErrorResponse(BaseModel):
    """Base error response model"""

    type: Literal["error"] = "error"
    reason: str


class HealthCheck(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime
