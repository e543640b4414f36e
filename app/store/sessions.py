# app/store/sessions.py
from __future__ import annotations

from typing import Dict, Optional, Protocol

from app.store.models import ReturningPlayerRecord


class SessionStore(Protocol):
    """
    Returning-player history keyed by user id.
    Written on leave/finish, read on join, never invalidated by reads.
    """

    async def get(self, user_id: str) -> Optional[ReturningPlayerRecord]:
        ...

    async def put(self, record: ReturningPlayerRecord) -> None:
        ...


class MemorySessionStore:
    """
    Process-local store. Each put replaces a single dict entry, which is atomic
    on the event loop, so concurrent users never see each other's record.
    """

    def __init__(self) -> None:
        self._records: Dict[str, ReturningPlayerRecord] = {}

    async def get(self, user_id: str) -> Optional[ReturningPlayerRecord]:
        rec = self._records.get(user_id)
        return rec.model_copy() if rec is not None else None

    async def put(self, record: ReturningPlayerRecord) -> None:
        self._records[record.user_id] = record.model_copy()

    def __len__(self) -> int:
        return len(self._records)
