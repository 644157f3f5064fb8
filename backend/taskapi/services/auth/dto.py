# taskapi/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param name: Display name.
    :type name: str
    :param email: Login email; normalized by the model.
    :type email: str
    :param password: Raw password; hashed by the model.
    :type password: str
    """

    name: str
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    refresh_token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenOut:
    """
    One encoded token and its absolute expiry.

    :param token: Encoded JWT.
    :type token: str
    :param expires: Expiry instant (UTC).
    :type expires: datetime
    """

    token: str
    expires: datetime


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access: Access token.
    :type access: TokenOut
    :param refresh: Refresh token.
    :type refresh: TokenOut
    """

    access: TokenOut
    refresh: TokenOut


@dataclass(frozen=True, slots=True)
class UserOut:
    """Public view of a user; never carries the password hash."""

    id: int
    name: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class AuthResultOut:
    """Login/registration result: the user plus a fresh token pair."""

    user: UserOut
    tokens: TokenPairOut


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    """

    access_expires: timedelta
    refresh_expires: timedelta

    @classmethod
    def from_mapping(cls, config) -> AuthTokenConfig:
        """Build from ``JWT_ACCESS_EXPIRATION_MINUTES``/``JWT_REFRESH_EXPIRATION_DAYS``."""
        return cls(
            access_expires=timedelta(minutes=int(config["JWT_ACCESS_EXPIRATION_MINUTES"])),
            refresh_expires=timedelta(days=int(config["JWT_REFRESH_EXPIRATION_DAYS"])),
        )
