# app/store/models.py
from __future__ import annotations

from pydantic import BaseModel, Field


class PlayerStore(BaseModel):
    pid: str
    name: str
    points: int = Field(default=0, ge=0)
    joined_at: int = 0


class LetterStore(BaseModel):
    letter: str
    guessed: bool = False


class ReturningPlayerRecord(BaseModel):
    """
    Snapshot written when a player leaves (with save) or is credited with a
    finished word. Read on join; never expired by the game itself.
    """
    user_id: str
    room_id: str
    round: int
    was_master: bool = False
    points: int = 0
    name: str = ""
    left_at: int = 0
