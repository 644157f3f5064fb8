from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from itertools import count
from typing import Protocol

from taskapi.models.token import TokenType


@dataclass(frozen=True, slots=True)
class TokenRecord:
    """
    Read-model for a stored token.

    :ivar id: Store-specific record identifier.
    :ivar token: Raw encoded token string.
    :ivar user_id: Owner user id.
    :ivar user_name: Owner display name at issuance.
    :ivar expires_at: Absolute expiration (UTC).
    :ivar token_type: Token kind.
    :ivar blacklisted: Whether the record was disabled without being consumed.
    """

    id: int | str
    token: str
    user_id: int
    user_name: str
    expires_at: datetime
    token_type: TokenType
    blacklisted: bool = False


class TokenStore(Protocol):
    """
    Server-side record of issued refresh tokens.

    ``invalidate`` MUST be atomic: of two callers racing on the same record,
    exactly one gets ``True``.
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
        """Persist a newly issued token."""
        ...

    def find_active(self, token: str, token_type: TokenType) -> TokenRecord | None:
        """Return the non-blacklisted record for ``token``; expiry is not checked."""
        ...

    def invalidate(self, record: TokenRecord) -> bool:
        """Remove ``record``; ``False`` when it had already been consumed."""
        ...


class InMemoryTokenStore(TokenStore):
    """
    In-memory token store.

    .. note::
       Uses a threading lock to make ``invalidate`` atomic in unit tests.
    """

    def __init__(self) -> None:
        self._records: dict[int, TokenRecord] = {}
        self._seq = count(1)
        self._lock = threading.Lock()

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
        with self._lock:
            record = TokenRecord(
                id=next(self._seq),
                token=token,
                user_id=user_id,
                user_name=user_name,
                expires_at=expires_at,
                token_type=token_type,
                blacklisted=blacklisted,
            )
            self._records[int(record.id)] = record
            return record

    def find_active(self, token: str, token_type: TokenType) -> TokenRecord | None:
        with self._lock:
            for record in self._records.values():
                if (
                    record.token == token
                    and record.token_type == token_type
                    and not record.blacklisted
                ):
                    return record
            return None

    def invalidate(self, record: TokenRecord) -> bool:
        with self._lock:
            current = self._records.get(int(record.id))
            if current is None or current.blacklisted:
                return False
            del self._records[int(record.id)]
            return True

    def __len__(self) -> int:
        return len(self._records)
