from __future__ import annotations

from .entity import Room
from .results import (
    FinishState,
    GuessInfo,
    LetterSlot,
    PlayerInfo,
    RoomSummary,
    WordGuessInfo,
    room_to_summary,
)

__all__ = [
    "Room",
    "FinishState",
    "GuessInfo",
    "LetterSlot",
    "PlayerInfo",
    "RoomSummary",
    "WordGuessInfo",
    "room_to_summary",
]
