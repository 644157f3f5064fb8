# tests/unit/repositories/test_repository_user.py
from __future__ import annotations

import pytest

from taskapi.repositories.user import UserRepository
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


@pytest.fixture()
def repo(session) -> UserRepository:
    return UserRepository(session=session)


def test_get_by_email_is_case_insensitive(repo):
    user = UserFactory(email="mixed@example.com")

    assert repo.get_by_email("  MIXED@Example.com ") is user
    assert repo.exists_by_email("mixed@example.com") is True
    assert repo.exists_by_email("other@example.com") is False


def test_authenticate(repo):
    user = UserFactory(email="auth@example.com")

    assert repo.authenticate("auth@example.com", DEFAULT_PASSWORD) is user
    assert repo.authenticate("auth@example.com", "wrong-pass1") is None
    assert repo.authenticate("missing@example.com", DEFAULT_PASSWORD) is None


def test_users_are_not_mass_assignable(repo):
    user = UserFactory(name="Ann")

    with pytest.raises(ValueError):
        repo.assign_updates(user, {"name": "Eve"})
    assert user.name == "Ann"
