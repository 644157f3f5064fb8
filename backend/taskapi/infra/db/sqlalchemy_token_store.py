# taskapi/infra/db/sqlalchemy_token_store.py
from __future__ import annotations

from datetime import datetime

from taskapi.models.token import Token, TokenType
from taskapi.services._shared.ports import TokenRecord, TokenStore
from taskapi.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


def _to_record(row: Token) -> TokenRecord:
    return TokenRecord(
        id=row.id,
        token=row.token,
        user_id=row.user_id,
        user_name=row.user_name,
        expires_at=row.expires_at,
        token_type=row.type,
        blacklisted=row.blacklisted,
    )


class SQLAlchemyTokenStore(TokenStore):
    """
    Token store persisted in the ``tokens`` table.

    Each call runs in its own Unit of Work. ``invalidate`` is a conditional
    ``DELETE`` whose rowcount decides which concurrent caller won.
    """

    def save(
        self,
        *,
        token: str,
        user_id: int,
        user_name: str,
        expires_at: datetime,
        token_type: TokenType,
        blacklisted: bool = False,
    ) -> TokenRecord:
        with SQLAlchemyUnitOfWork() as uow:
            row = uow.tokens.add(
                Token(
                    token=token,
                    user_id=user_id,
                    user_name=user_name,
                    expires_at=expires_at,
                    type=TokenType(token_type),
                    blacklisted=blacklisted,
                )
            )
            return _to_record(row)

    def find_active(self, token: str, token_type: TokenType) -> TokenRecord | None:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            row = uow.tokens.find_active(token, TokenType(token_type))
            return _to_record(row) if row is not None else None

    def invalidate(self, record: TokenRecord) -> bool:
        with SQLAlchemyUnitOfWork() as uow:
            return uow.tokens.consume(int(record.id))
