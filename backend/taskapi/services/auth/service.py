# taskapi/services/auth/service.py
from __future__ import annotations

import logging
from datetime import UTC, datetime
from enum import Enum

from sqlalchemy.exc import IntegrityError

from taskapi.models.token import TokenType
from taskapi.models.user import User
from taskapi.services._shared.base import BaseService, ServiceContext
from taskapi.services._shared.errors import AuthenticationError, ConflictError, violates
from taskapi.services._shared.ports import DecodeStatus, TokenCodec, TokenStore
from taskapi.services.auth.dto import (
    AuthResultOut,
    AuthTokenConfig,
    LoginIn,
    RefreshIn,
    RegisterIn,
    TokenOut,
    TokenPairOut,
    UserOut,
)

log = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Incorrect email or password"


class RefreshOutcome(Enum):
    """Result of each step of a refresh attempt."""

    OK = "ok"
    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    NOT_FOUND = "not_found"
    UNKNOWN_USER = "unknown_user"
    ALREADY_CONSUMED = "already_consumed"


_DECODE_OUTCOMES = {
    DecodeStatus.EXPIRED: RefreshOutcome.EXPIRED_TOKEN,
    DecodeStatus.INVALID: RefreshOutcome.INVALID_TOKEN,
    DecodeStatus.WRONG_TYPE: RefreshOutcome.INVALID_TOKEN,
}


def to_user_out(user: User) -> UserOut:
    """Copy the public fields of ``user`` into a detached DTO."""
    return UserOut(
        id=user.id,
        name=user.name,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class AuthService(BaseService):
    """
    Authentication lifecycle service (login / register / refresh).

    Tokens are signed through a :class:`TokenCodec`; refresh tokens are
    recorded in a :class:`TokenStore` and consumed exactly once. Neither the
    codec nor the lifetimes are read from global state.
    """

    def __init__(
        self,
        *,
        token_codec: TokenCodec,
        token_store: TokenStore,
        token_cfg: AuthTokenConfig,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_codec: Adapter for signing/verifying JWTs.
        :param token_store: Store for issued refresh tokens.
        :param token_cfg: Access/Refresh lifetime configuration.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.codec = token_codec
        self.store = token_store
        self.cfg = token_cfg

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> AuthResultOut:
        """
        Authenticate credentials and issue a fresh token pair.

        :param dto: Login input.
        :returns: The user and an access/refresh token pair.
        :raises AuthenticationError: If the email is unknown or the password is wrong.
        """
        with self.ro_uow() as uow:
            user = uow.users.authenticate(dto.email, dto.password)
            if user is None:
                log.info("auth.login.failed", extra={"outcome": "bad_credentials"})
                raise AuthenticationError(LOGIN_FAILED_MESSAGE)
            user_out = to_user_out(user)

        tokens = self.issue_token_pair(user_out.id, user_out.name)
        log.info("auth.login.succeeded", extra={"user_id": user_out.id})
        return AuthResultOut(user=user_out, tokens=tokens)

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> AuthResultOut:
        """
        Create an account and sign it in.

        :param dto: Registration input.
        :returns: The new user and an access/refresh token pair.
        :raises ConflictError: If the email is already registered.
        """
        try:
            with self.rw_uow() as uow:
                if uow.users.exists_by_email(dto.email):
                    raise ConflictError("User", "Email already taken")
                user = User(name=dto.name, email=dto.email)
                user.password = dto.password
                uow.users.add(user)
                user_out = to_user_out(user)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same email
            if violates(exc, "uq_users_email"):
                raise ConflictError("User", "Email already taken") from exc
            raise

        tokens = self.issue_token_pair(user_out.id, user_out.name)
        log.info("auth.register.succeeded", extra={"user_id": user_out.id})
        return AuthResultOut(user=user_out, tokens=tokens)

    # ------------------------------------------------------------------ #
    # Refresh (single-use rotation)
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Consume a refresh token and emit a new token pair.

        Every failure cause is logged and reported to the caller as the same
        :class:`AuthenticationError`.

        :param dto: Refresh input.
        :returns: A new access/refresh token pair.
        :raises AuthenticationError: For any rejected refresh token.
        """
        outcome, user = self._consume_refresh_token(dto.refresh_token)
        if outcome is not RefreshOutcome.OK or user is None:
            log.warning("auth.refresh.rejected", extra={"outcome": outcome.value})
            raise AuthenticationError()

        tokens = self.issue_token_pair(user.id, user.name)
        log.info("auth.refresh.succeeded", extra={"user_id": user.id})
        return tokens

    def _consume_refresh_token(self, raw: str) -> tuple[RefreshOutcome, UserOut | None]:
        decoded = self.codec.decode(raw, expected_type=TokenType.REFRESH)
        if not decoded.ok or decoded.token is None:
            return _DECODE_OUTCOMES.get(decoded.status, RefreshOutcome.INVALID_TOKEN), None

        record = self.store.find_active(raw, TokenType.REFRESH)
        if record is None or record.user_id != decoded.token.subject_id:
            return RefreshOutcome.NOT_FOUND, None

        with self.ro_uow() as uow:
            user = uow.users.get(record.user_id)
            user_out = to_user_out(user) if user is not None else None
        if user_out is None:
            return RefreshOutcome.UNKNOWN_USER, None

        if not self.store.invalidate(record):
            return RefreshOutcome.ALREADY_CONSUMED, None

        return RefreshOutcome.OK, user_out

    # ------------------------------------------------------------------ #
    # Token issuance
    # ------------------------------------------------------------------ #

    def issue_token_pair(self, user_id: int, user_name: str) -> TokenPairOut:
        """
        Sign an access and a refresh token; only the refresh token is stored.

        :param user_id: Subject of both tokens.
        :param user_name: Display name copied into the tokens.
        :returns: Both tokens with their expiry instants.
        """
        now = self.now_utc()
        access_expires = now + self.cfg.access_expires
        refresh_expires = now + self.cfg.refresh_expires

        access = self.codec.issue(
            subject_id=user_id,
            subject_name=user_name,
            expires_at=access_expires,
            token_type=TokenType.ACCESS,
        )
        refresh = self.codec.issue(
            subject_id=user_id,
            subject_name=user_name,
            expires_at=refresh_expires,
            token_type=TokenType.REFRESH,
        )
        self.store.save(
            token=refresh,
            user_id=user_id,
            user_name=user_name,
            expires_at=refresh_expires,
            token_type=TokenType.REFRESH,
        )

        return TokenPairOut(
            access=TokenOut(token=access, expires=access_expires),
            refresh=TokenOut(token=refresh, expires=refresh_expires),
        )

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(UTC)
