"""Unit tests for password hashing and verification."""

from __future__ import annotations

import pytest

from taskapi.core.security import hash_password, verify_password


def test_hash_is_salted_and_not_plaintext():
    first = hash_password("s3cretpass")
    second = hash_password("s3cretpass")

    assert first != "s3cretpass"
    assert first != second  # random salt per hash


def test_verify_password_accepts_matching_plaintext():
    stored = hash_password("s3cretpass")

    assert verify_password("s3cretpass", stored) is True


def test_verify_password_rejects_wrong_plaintext():
    stored = hash_password("s3cretpass")

    assert verify_password("s3cretpasS", stored) is False


@pytest.mark.parametrize("stored", ["", None])
def test_verify_password_never_matches_empty_hash(stored):
    assert verify_password("anything1", stored) is False


def test_hash_password_rejects_empty_input():
    with pytest.raises(ValueError):
        hash_password("")
