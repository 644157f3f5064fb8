# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

import redis

from taskapi.models.token import TokenType
from taskapi.services._shared.ports import TokenRecord, TokenStore


@dataclass(slots=True)
class RedisTokenStore(TokenStore):
    """
    Redis-backed token store.

    One hash per token under ``tok:<type>:<token>``; its TTL follows the
    token expiry so stale entries disappear on their own.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    # -------------------- helpers --------------------

    @staticmethod
    def _k(token: str, token_type: TokenType) -> str:
        return f"tok:{TokenType(token_type).value}:{token}"

    @staticmethod
    def _to_ts(dt: datetime) -> int:
        # Naive datetimes are taken as UTC
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return int(dt.timestamp())

    @staticmethod
    def _s(value: bytes | str) -> str:
        return value.decode() if isinstance(value, bytes) else value

    # -------------------- API ------------------------

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
        key = self._k(token, token_type)
        ttl = max(1, self._to_ts(expires_at) - self._to_ts(datetime.now(UTC)))

        pipe = self.r.pipeline(transaction=True)
        pipe.hset(
            key,
            mapping={
                "user_id": str(user_id),
                "user_name": user_name,
                "expires_at": str(self._to_ts(expires_at)),
                "blacklisted": "1" if blacklisted else "0",
            },
        )
        pipe.expire(key, ttl)
        pipe.execute()

        return TokenRecord(
            id=key,
            token=token,
            user_id=user_id,
            user_name=user_name,
            expires_at=expires_at,
            token_type=TokenType(token_type),
            blacklisted=blacklisted,
        )

    def find_active(self, token: str, token_type: TokenType) -> TokenRecord | None:
        key = self._k(token, token_type)
        raw = self.r.hgetall(key)
        if not raw:
            return None
        data = {self._s(k): self._s(v) for k, v in raw.items()}
        if data.get("blacklisted") == "1":
            return None
        return TokenRecord(
            id=key,
            token=token,
            user_id=int(data["user_id"]),
            user_name=data.get("user_name", ""),
            expires_at=datetime.fromtimestamp(int(data["expires_at"]), tz=UTC),
            token_type=TokenType(token_type),
        )

    def invalidate(self, record: TokenRecord) -> bool:
        # DEL is atomic: only one concurrent caller sees a deleted count of 1
        return int(self.r.delete(str(record.id))) == 1
