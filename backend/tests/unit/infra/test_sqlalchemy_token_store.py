"""Unit tests for the SQLAlchemy token store against the transactional session."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from taskapi.infra.db.sqlalchemy_token_store import SQLAlchemyTokenStore
from taskapi.models.token import Token, TokenType
from tests.factories.user import UserFactory


@pytest.fixture
def store() -> SQLAlchemyTokenStore:
    return SQLAlchemyTokenStore()


@pytest.fixture
def user(session):
    user = UserFactory()
    session.commit()
    return user


def _save(store, user, token="refresh-abc", **kwargs):
    return store.save(
        token=token,
        user_id=user.id,
        user_name=user.name,
        expires_at=datetime.now(UTC) + timedelta(days=30),
        token_type=TokenType.REFRESH,
        **kwargs,
    )


def test_save_persists_row(store, user, session):
    record = _save(store, user)

    row = session.get(Token, record.id)
    assert row is not None
    assert row.token == "refresh-abc"
    assert row.type is TokenType.REFRESH
    assert row.blacklisted is False
    assert row.expires_at.tzinfo is not None


def test_find_active_matches_token_and_type(store, user):
    record = _save(store, user)

    found = store.find_active("refresh-abc", TokenType.REFRESH)

    assert found == record
    assert store.find_active("refresh-abc", TokenType.ACCESS) is None
    assert store.find_active("unknown", TokenType.REFRESH) is None


def test_find_active_skips_blacklisted(store, user):
    _save(store, user, blacklisted=True)

    assert store.find_active("refresh-abc", TokenType.REFRESH) is None


def test_invalidate_deletes_once(store, user, session):
    record = _save(store, user)

    assert store.invalidate(record) is True
    assert store.invalidate(record) is False
    assert session.get(Token, record.id) is None
