"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

import re

from marshmallow import Schema, ValidationError, fields, validate

from .common import not_blank

_LETTER = re.compile(r"[A-Za-z]")
_DIGIT = re.compile(r"\d")


def strong_password(value: str) -> None:
    """At least 8 characters with one letter and one digit."""
    if len(value) < 8:
        raise ValidationError("Password must be at least 8 characters.")
    if not _LETTER.search(value) or not _DIGIT.search(value):
        raise ValidationError("Password must contain at least 1 letter and 1 number.")


class RegisterSchema(Schema):
    """Input payload for account registration."""

    name = fields.String(required=True, validate=[not_blank, validate.Length(max=100)])
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(
        required=True, load_only=True, validate=[validate.Length(max=128), strong_password]
    )


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))


class RefreshTokenSchema(Schema):
    """Input payload carrying the refresh token to consume."""

    refresh_token = fields.String(
        required=True, data_key="refreshToken", validate=validate.Length(min=1)
    )


class UserSchema(Schema):
    """Public representation of a user; the password hash is never dumped."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    email = fields.Email(required=True)
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")


class TokenSchema(Schema):
    token = fields.String(required=True)
    expires = fields.DateTime(required=True)


class TokenPairSchema(Schema):
    """Access and refresh tokens with their expiry instants."""

    access = fields.Nested(TokenSchema, required=True)
    refresh = fields.Nested(TokenSchema, required=True)


class AuthResultSchema(Schema):
    """Login/registration response body."""

    user = fields.Nested(UserSchema, required=True)
    tokens = fields.Nested(TokenPairSchema, required=True)
