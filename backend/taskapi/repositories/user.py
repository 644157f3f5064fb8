"""User repository for persistence and authentication utilities."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from taskapi.models.user import User
from taskapi.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    This repository focuses on safe lookup and credential checks.
    It NEVER handles JWT or session creation, only DB-level user management.
    """

    model = User

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists.

        :param email: Email address to normalise and search.
        :type email: str
        :returns: ``True`` if a row is found; otherwise ``False``.
        :rtype: bool
        """
        stmt = select(User.id).where(User.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())

    # ---------------------------- Password ops ----------------------------

    def authenticate(self, email: str, password: str) -> User | None:
        """Authenticate a user by email and password.

        Unknown email and wrong password are indistinguishable to the caller.

        :param email: Email address to authenticate.
        :type email: str
        :param password: Raw password to verify.
        :type password: str
        :returns: Authenticated user or ``None`` when credentials fail.
        :rtype: User | None
        """
        user = self.get_by_email(email)
        if not user or not user.verify_password(password):
            return None
        return user
