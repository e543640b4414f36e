# app/store/redis_sessions.py
from __future__ import annotations

from typing import Optional

from redis.asyncio import Redis

from app.store.models import ReturningPlayerRecord
from app.store.redis_keys import SK


class RedisSessionStore:
    """
    Returning-player history shared across server processes.
    Each record is one JSON string under session:<user_id>.
    """

    def __init__(self, r: Redis, ttl_sec: int = 0):
        self.r = r
        self.ttl_sec = ttl_sec

    def _dec(self, x):
        """Decode redis bytes -> str; pass through str/None safely."""
        if x is None:
            return None
        if isinstance(x, bytes):
            return x.decode("utf-8")
        return x

    async def get(self, user_id: str) -> Optional[ReturningPlayerRecord]:
        raw = await self.r.get(SK(user_id).session())
        if not raw:
            return None
        return ReturningPlayerRecord.model_validate_json(self._dec(raw))

    async def put(self, record: ReturningPlayerRecord) -> None:
        key = SK(record.user_id).session()
        if self.ttl_sec > 0:
            await self.r.set(key, record.model_dump_json(), ex=self.ttl_sec)
        else:
            await self.r.set(key, record.model_dump_json())
