import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from atom_token.constants import TOKENS_TABLE


class BaseModel(AsyncAttrs, DeclarativeBase):
    pass


class Token(BaseModel):
    """Opaque bearer token bound to the user (the ID itself is the secret value)"""

    __tablename__ = TOKENS_TABLE
    __table_args__ = (sa.Index("ix_token_user_id_created", "user_id", "created"),)

    id: Mapped[str] = mapped_column(sa.String(512), primary_key=True)
    user_id: Mapped[int] = mapped_column(sa.BigInteger, nullable=False)
    created: Mapped[int] = mapped_column(sa.BigInteger, nullable=False)  # unix timestamp UTC
    label: Mapped[str] = mapped_column(sa.Text, nullable=False, default="")

    def __str__(self) -> str:
        return f"Token for user '{self.user_id}'"

    def __repr__(self) -> str:
        return (
            f"Token("
            f"id='[MASKED]', "
            f"user_id={self.user_id}, "
            f"label={self.label!r}, "
            f"created={self.created}"
            f")"
        )
