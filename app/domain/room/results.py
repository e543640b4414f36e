# app/domain/room/results.py
from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

from pydantic import BaseModel, Field

from app.domain.common.types import FinishReason, RoomState

if TYPE_CHECKING:
    from app.domain.room.entity import Room
    from app.store.models import PlayerStore


class LetterSlot(BaseModel):
    """Public view of one letter; `letter` stays None until guessed."""
    letter: Optional[str] = None
    guessed: bool = False


class PlayerInfo(BaseModel):
    id: str
    name: str
    points: int = 0
    is_master: bool = False


class GuessInfo(BaseModel):
    letter: str
    hit: bool
    positions: List[int] = Field(default_factory=list)
    player_id: Optional[str] = None
    points_awarded: int = 0
    synthetic: bool = False  # reveal at finish, not a player's guess


class WordGuessInfo(BaseModel):
    word: str
    correct: bool
    player_id: str
    points_awarded: int = 0


class FinishState(BaseModel):
    player: Optional[PlayerInfo] = None
    reason: FinishReason
    word: str


class RoomSummary(BaseModel):
    id: str
    round: int
    state: RoomState
    master_id: Optional[str] = None
    current_turn: Optional[str] = None
    players: List[PlayerInfo] = Field(default_factory=list)
    current_word: List[LetterSlot] = Field(default_factory=list)
    guessed_letters: List[str] = Field(default_factory=list)


def player_info(room: "Room", player: "PlayerStore") -> PlayerInfo:
    return PlayerInfo(
        id=player.pid,
        name=player.name,
        points=player.points,
        is_master=room.master_id == player.pid,
    )


def masked_word(room: "Room") -> List[LetterSlot]:
    return [
        LetterSlot(letter=slot.letter if slot.guessed else None, guessed=slot.guessed)
        for slot in room.current_word
    ]


def room_to_summary(room: "Room") -> RoomSummary:
    return RoomSummary(
        id=room.id,
        round=room.round,
        state=room.state,
        master_id=room.master_id,
        current_turn=room.current_turn,
        players=[player_info(room, p) for p in room.players],
        current_word=masked_word(room),
        guessed_letters=sorted(room.guessed_letters),
    )
