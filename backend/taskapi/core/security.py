"""Password hashing and verification.

Hashes are produced by Werkzeug (salted scrypt/pbkdf2) and compared with a
constant-time digest check. Plaintext passwords never leave this module.
"""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(raw: str) -> str:
    """
    Return a salted one-way hash for ``raw``.

    :param raw: Plain text password.
    :type raw: str
    :returns: Encoded hash including algorithm and salt.
    :rtype: str
    :raises ValueError: If ``raw`` is empty or not a string.
    """
    if not isinstance(raw, str) or not raw:
        raise ValueError("Password must be a non-empty string.")
    return generate_password_hash(raw)


def verify_password(raw: str, stored_hash: str | None) -> bool:
    """
    Check ``raw`` against ``stored_hash`` without side effects.

    :param raw: Plain text password candidate.
    :type raw: str
    :param stored_hash: Hash previously produced by :func:`hash_password`.
    :type stored_hash: str | None
    :returns: ``True`` only when the hash matches.
    :rtype: bool
    """
    if not stored_hash or not isinstance(raw, str):
        return False
    # ``check_password_hash`` is untyped; coerce for mypy.
    return bool(check_password_hash(stored_hash, raw))
