# tests/unit/models/test_model_user.py
from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from taskapi.models.user import User
from tests.factories.user import UserFactory


def test_email_is_normalized():
    user = User(name="  Ann ", email="  Ann@Example.COM ")

    assert user.email == "ann@example.com"
    assert user.name == "Ann"


@pytest.mark.parametrize("email", ["", "no-at-sign", "user@localhost"])
def test_invalid_email_rejected(email):
    with pytest.raises(ValueError):
        User(name="Ann", email=email)


def test_blank_name_rejected():
    with pytest.raises(ValueError):
        User(name="   ", email="ann@example.com")


def test_password_is_write_only_and_hashed():
    user = User(name="Ann", email="ann@example.com")
    user.password = "secret123"

    assert user.password_hash != "secret123"
    assert user.verify_password("secret123")
    assert not user.verify_password("secret124")
    with pytest.raises(AttributeError):
        _ = user.password


def test_email_is_unique(session):
    UserFactory(email="dup@example.com")

    with pytest.raises(IntegrityError):
        UserFactory(email="DUP@example.com")
    session.rollback()
