"""CORS policy for the task API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from taskapi.core.logger import REQUEST_ID_HEADER


def init_app(app: Flask) -> None:
    """Apply the CORS policy configured through ``CORS_ORIGINS``.

    A blank value or ``"*"`` opens the API to any origin and turns credential
    support off. The correlation header is exposed so browser clients can
    report it alongside errors.
    """
    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = not origins or origins == ["*"]
    api_prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")

    CORS(
        app,
        resources={rf"{api_prefix}/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        expose_headers=[REQUEST_ID_HEADER],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
