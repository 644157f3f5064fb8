# taskapi/infra/jwt/pyjwt_token_codec.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

import jwt as pyjwt

from taskapi.models.token import TokenType
from taskapi.services._shared.ports import DecodedToken, DecodeResult, DecodeStatus, TokenCodec

log = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("sub", "name", "iat", "exp", "type", "jti")


@dataclass(slots=True)
class PyJWTTokenCodec(TokenCodec):
    """
    HMAC-signed JWT codec backed by PyJWT.

    The secret is injected at construction; nothing is read from the Flask
    config, so the codec works the same inside and outside a request.

    :param secret: Signing key shared with Flask-JWT-Extended.
    :param algorithm: JWS algorithm, ``HS256`` by default.
    """

    secret: str = field(repr=False)
    algorithm: str = "HS256"

    def __post_init__(self) -> None:
        if not self.secret:
            raise ValueError("A JWT signing secret is required.")

    def issue(
        self,
        *,
        subject_id: int,
        subject_name: str,
        expires_at: datetime,
        token_type: TokenType,
    ) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(subject_id),
            "name": subject_name,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "type": TokenType(token_type).value,
            "jti": uuid4().hex,
        }
        return pyjwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str, *, expected_type: TokenType) -> DecodeResult:
        try:
            payload = pyjwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except pyjwt.ExpiredSignatureError:
            return DecodeResult(DecodeStatus.EXPIRED)
        except pyjwt.InvalidTokenError as exc:
            log.debug("JWT rejected: %s", exc)
            return DecodeResult(DecodeStatus.INVALID)

        decoded = self._to_decoded(payload)
        if decoded is None:
            return DecodeResult(DecodeStatus.INVALID)
        if decoded.token_type is not TokenType(expected_type):
            return DecodeResult(DecodeStatus.WRONG_TYPE)
        return DecodeResult(DecodeStatus.OK, decoded)

    @staticmethod
    def _to_decoded(payload: dict[str, Any]) -> DecodedToken | None:
        """Coerce verified claims; ``None`` when any of them is malformed."""
        sub = payload["sub"]
        if not isinstance(sub, str) or not sub.isdigit():
            return None
        try:
            token_type = TokenType(payload["type"])
        except ValueError:
            return None
        name = payload["name"]
        if not isinstance(name, str):
            return None
        return DecodedToken(
            subject_id=int(sub),
            subject_name=name,
            token_type=token_type,
            issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=UTC),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
            jti=str(payload["jti"]),
        )
