"""Wire :class:`AuthService` from application configuration."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import current_app

from taskapi.infra.jwt.pyjwt_token_codec import PyJWTTokenCodec
from taskapi.services._shared.base import ServiceContext
from taskapi.services._shared.ports import TokenStore
from taskapi.services.auth.dto import AuthTokenConfig
from taskapi.services.auth.service import AuthService


def build_token_store(config: Mapping[str, Any]) -> TokenStore:
    """
    Select the token store adapter from ``TOKEN_STORE_BACKEND``.

    :raises ValueError: On an unknown backend name.
    """
    backend = str(config.get("TOKEN_STORE_BACKEND", "database")).lower()
    if backend == "database":
        from taskapi.infra.db.sqlalchemy_token_store import SQLAlchemyTokenStore

        return SQLAlchemyTokenStore()
    if backend == "redis":
        from taskapi.core.extensions import get_redis
        from taskapi.infra.redis.redis_token_store import RedisTokenStore

        return RedisTokenStore(get_redis())
    raise ValueError(f"Unknown TOKEN_STORE_BACKEND: {backend!r}")


def build_auth_service(
    config: Mapping[str, Any] | None = None, *, ctx: ServiceContext | None = None
) -> AuthService:
    """
    Build an :class:`AuthService` with explicit collaborators.

    :param config: Settings mapping; defaults to the current app config.
    :param ctx: Optional request-scoped context.
    """
    cfg = config if config is not None else current_app.config
    codec = PyJWTTokenCodec(
        secret=cfg["JWT_SECRET_KEY"],
        algorithm=cfg.get("JWT_ALGORITHM", "HS256"),
    )
    return AuthService(
        token_codec=codec,
        token_store=build_token_store(cfg),
        token_cfg=AuthTokenConfig.from_mapping(cfg),
        ctx=ctx,
    )
