# app/store/redis_keys.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SK:
    """
    Redis key builder for user-scoped session keys.
    One key per user so writes for different users never collide.
    """
    user_id: str

    def session(self) -> str:
        return f"session:{self.user_id}"  # STRING (ReturningPlayerRecord JSON)
