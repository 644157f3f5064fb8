"""Unit tests for the PyJWT-backed token codec."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt as pyjwt
import pytest
from freezegun import freeze_time

from taskapi.infra.jwt.pyjwt_token_codec import PyJWTTokenCodec
from taskapi.models.token import TokenType
from taskapi.services._shared.ports import DecodeStatus

SECRET = "unit-test-secret-with-at-least-32-bytes!"


@pytest.fixture
def codec() -> PyJWTTokenCodec:
    return PyJWTTokenCodec(secret=SECRET)


def _issue(codec, token_type=TokenType.ACCESS, *, ttl=timedelta(minutes=30), user_id=7):
    return codec.issue(
        subject_id=user_id,
        subject_name="Ann",
        expires_at=datetime.now(UTC) + ttl,
        token_type=token_type,
    )


def test_issue_then_decode_round_trips_subject_and_type(codec):
    token = _issue(codec, TokenType.REFRESH, user_id=42)

    result = codec.decode(token, expected_type=TokenType.REFRESH)

    assert result.status is DecodeStatus.OK
    assert result.ok
    assert result.token.subject_id == 42
    assert result.token.subject_name == "Ann"
    assert result.token.token_type is TokenType.REFRESH


def test_claims_use_string_subject_and_lowercase_type(codec):
    token = _issue(codec, user_id=5)

    claims = pyjwt.decode(token, SECRET, algorithms=["HS256"])

    assert claims["sub"] == "5"
    assert claims["type"] == "access"
    assert set(claims) >= {"sub", "name", "iat", "exp", "type", "jti"}


def test_tokens_issued_in_same_second_differ(codec):
    with freeze_time("2024-03-01 10:00:00"):
        first = _issue(codec, TokenType.REFRESH)
        second = _issue(codec, TokenType.REFRESH)

    assert first != second


def test_decode_reports_wrong_type(codec):
    token = _issue(codec, TokenType.ACCESS)

    result = codec.decode(token, expected_type=TokenType.REFRESH)

    assert result.status is DecodeStatus.WRONG_TYPE
    assert result.token is None


def test_decode_reports_expired_token(codec):
    with freeze_time("2024-03-01 10:00:00"):
        token = _issue(codec, ttl=timedelta(minutes=5))

    with freeze_time("2024-03-01 10:06:00"):
        result = codec.decode(token, expected_type=TokenType.ACCESS)

    assert result.status is DecodeStatus.EXPIRED


def test_decode_rejects_foreign_signature(codec):
    other = PyJWTTokenCodec(secret="another-secret-that-is-also-32-bytes-long")
    token = _issue(other)

    assert codec.decode(token, expected_type=TokenType.ACCESS).status is DecodeStatus.INVALID


@pytest.mark.parametrize("garbage", ["", "not-a-jwt", "a.b.c"])
def test_decode_rejects_malformed_input(codec, garbage):
    assert codec.decode(garbage, expected_type=TokenType.ACCESS).status is DecodeStatus.INVALID


def test_decode_rejects_missing_claims(codec):
    now = datetime.now(UTC)
    token = pyjwt.encode(
        {"sub": "1", "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp())},
        SECRET,
        algorithm="HS256",
    )

    assert codec.decode(token, expected_type=TokenType.ACCESS).status is DecodeStatus.INVALID


def test_decode_rejects_non_numeric_subject(codec):
    now = datetime.now(UTC)
    token = pyjwt.encode(
        {
            "sub": "alice",
            "name": "Alice",
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(hours=1)).timestamp()),
            "type": "access",
            "jti": "x",
        },
        SECRET,
        algorithm="HS256",
    )

    assert codec.decode(token, expected_type=TokenType.ACCESS).status is DecodeStatus.INVALID


def test_codec_requires_secret():
    with pytest.raises(ValueError):
        PyJWTTokenCodec(secret="")
