from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Protocol

from taskapi.models.token import TokenType


class DecodeStatus(Enum):
    """Outcome of verifying a signed token."""

    OK = auto()
    EXPIRED = auto()
    INVALID = auto()
    WRONG_TYPE = auto()


@dataclass(frozen=True, slots=True)
class DecodedToken:
    """
    Verified token payload.

    :ivar subject_id: User id carried in ``sub``.
    :ivar subject_name: User display name carried in ``name``.
    :ivar token_type: Value of the ``type`` claim.
    :ivar issued_at: ``iat`` as an aware UTC datetime.
    :ivar expires_at: ``exp`` as an aware UTC datetime.
    :ivar jti: Unique token identifier.
    """

    subject_id: int
    subject_name: str
    token_type: TokenType
    issued_at: datetime
    expires_at: datetime
    jti: str


@dataclass(frozen=True, slots=True)
class DecodeResult:
    """Status plus payload; ``token`` is set only when ``status`` is ``OK``."""

    status: DecodeStatus
    token: DecodedToken | None = None

    @property
    def ok(self) -> bool:
        return self.status is DecodeStatus.OK


class TokenCodec(Protocol):
    """Port for signing and verifying JWTs."""

    def issue(
        self,
        *,
        subject_id: int,
        subject_name: str,
        expires_at: datetime,
        token_type: TokenType,
    ) -> str:
        """Sign a token for the subject, valid until ``expires_at``."""
        ...

    def decode(self, token: str, *, expected_type: TokenType) -> DecodeResult:
        """Verify signature, expiry and type without raising."""
        ...
