"""Persisted token records (refresh-token sessions)."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import Boolean, Enum, ForeignKey, Index, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column

from taskapi.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, UTCDateTime


class TokenType(str, enum.Enum):
    """Kind of JWT; the value is the ``type`` claim carried by the token."""

    ACCESS = "access"
    REFRESH = "refresh"


class Token(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Server-side record of an issued token.

    Only refresh tokens are stored. A record is deleted when the token is
    consumed, which is what makes refresh tokens single-use.
    """

    __tablename__ = "tokens"

    token: Mapped[str] = mapped_column(String(1024), nullable=False, unique=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    user_name: Mapped[str] = mapped_column(String(100), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    type: Mapped[TokenType] = mapped_column(
        Enum(TokenType, name="token_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    blacklisted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    __table_args__ = (Index("ix_tokens_user_id", "user_id"),)
