"""Refresh-token persistence."""

from __future__ import annotations

from typing import cast

from sqlalchemy import delete, select

from taskapi.models.token import Token, TokenType
from taskapi.repositories.base import BaseRepository


class TokenRepository(BaseRepository[Token]):
    """Persistence-only repository for :class:`Token` records."""

    model = Token

    def find_active(self, token: str, token_type: TokenType) -> Token | None:
        """Return the non-blacklisted record for ``token`` of ``token_type``.

        Expiry is not checked here; it is enforced when the JWT is decoded.
        """
        stmt = select(Token).where(
            Token.token == token,
            Token.type == token_type,
            Token.blacklisted.is_(False),
        )
        return cast(Token | None, self.session.execute(stmt).scalars().first())

    def consume(self, token_id: int) -> bool:
        """Delete an active record in a single statement.

        :returns: ``True`` when this call removed the row, ``False`` when it
                  was already gone (another request consumed it first).
        :rtype: bool
        """
        stmt = (
            delete(Token)
            .where(Token.id == token_id, Token.blacklisted.is_(False))
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        return bool(result.rowcount)
