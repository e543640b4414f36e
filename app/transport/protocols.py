# app/transport/protocols.py
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field

from app.domain.room.results import (
    FinishState,
    GuessInfo,
    LetterSlot,
    PlayerInfo,
    RoomSummary,
)


# =========================
# Incoming (Client -> Server, HTTP bodies)
# =========================

class InUser(BaseModel):
    """Create room / join room."""
    name: str = Field(min_length=1, max_length=24)


class InSetWord(BaseModel):
    word: str = Field(min_length=1, max_length=50)


class InGuess(BaseModel):
    letter: str = Field(min_length=1, max_length=1)


class InWordGuess(BaseModel):
    word: str = Field(min_length=1, max_length=50)


# =========================
# Outgoing (Server -> room subscribers)
# =========================

class OutBase(BaseModel):
    type: str


class OutError(OutBase):
    type: Literal["error"] = "error"
    code: str
    message: str


class OutRoomSnapshot(OutBase):
    type: Literal["room_snapshot"] = "room_snapshot"
    room: RoomSummary


class OutRoomRestarted(OutBase):
    type: Literal["room_restarted"] = "room_restarted"
    room: RoomSummary


class OutPlayerJoined(OutBase):
    type: Literal["player_joined"] = "player_joined"
    player: PlayerInfo


class OutPlayerLeft(OutBase):
    type: Literal["player_left"] = "player_left"
    player: PlayerInfo


class OutMasterChanged(OutBase):
    type: Literal["master_changed"] = "master_changed"
    player_id: str


class OutWordSet(OutBase):
    type: Literal["word_set"] = "word_set"
    word: List[LetterSlot]


class OutNewGuess(OutBase):
    type: Literal["new_guess"] = "new_guess"
    guess: GuessInfo


class OutNewTurn(OutBase):
    type: Literal["new_turn"] = "new_turn"
    player_id: Optional[str] = None


class OutGameFinished(OutBase):
    type: Literal["game_finished"] = "game_finished"
    finish: FinishState


class OutPlayerUpdated(OutBase):
    type: Literal["player_updated"] = "player_updated"
    player: PlayerInfo


class OutNewWordGuess(OutBase):
    type: Literal["new_word_guess"] = "new_word_guess"
    word: str
    player_id: str


OutgoingEvent = Union[
    OutError,
    OutRoomSnapshot,
    OutRoomRestarted,
    OutPlayerJoined,
    OutPlayerLeft,
    OutMasterChanged,
    OutWordSet,
    OutNewGuess,
    OutNewTurn,
    OutGameFinished,
    OutPlayerUpdated,
    OutNewWordGuess,
]


def dump_event(event: OutgoingEvent) -> Dict[str, Any]:
    return event.model_dump()
