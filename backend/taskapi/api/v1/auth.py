"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from taskapi.api.deps import get_auth_service, json_response, timing
from taskapi.core.extensions import limiter
from taskapi.schemas import (
    AuthResultSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenPairSchema,
)
from taskapi.services.auth.dto import LoginIn, RefreshIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshTokenSchema()
auth_result_schema = AuthResultSchema()
token_pair_schema = TokenPairSchema()


def _auth_rate_limit() -> str:
    return str(current_app.config.get("AUTH_RATE_LIMIT", "10 per minute"))


@bp.post("/register")
@limiter.limit(_auth_rate_limit)
@timing
def register():
    """Create an account and return it with a token pair."""

    data = register_schema.load(request.get_json(silent=True) or {})
    result = get_auth_service().register(RegisterIn(**data))
    return json_response({"data": auth_result_schema.dump(result)}, status=201)


@bp.post("/login")
@limiter.limit(_auth_rate_limit)
@timing
def login():
    """Authenticate credentials and return the user with a token pair."""

    data = login_schema.load(request.get_json(silent=True) or {})
    result = get_auth_service().login(LoginIn(**data))
    return json_response({"data": auth_result_schema.dump(result)})


@bp.post("/refresh-tokens")
@timing
def refresh_tokens():
    """Exchange a refresh token (single use) for a new token pair."""

    data = refresh_schema.load(request.get_json(silent=True) or {})
    tokens = get_auth_service().refresh(RefreshIn(refresh_token=data["refresh_token"]))
    return json_response({"data": token_pair_schema.dump(tokens)})
