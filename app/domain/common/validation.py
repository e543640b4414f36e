# app/domain/common/validation.py
from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from app.domain.common.errors import (
    InvalidLetterError,
    InvalidWordError,
    NotMasterError,
    NotTurnHolderError,
)

if TYPE_CHECKING:
    from app.domain.room.entity import Room


def normalize_letter(letter: str) -> str:
    """Lower-case a single-letter guess; reject anything else."""
    norm = (letter or "").strip().lower()
    if len(norm) != 1 or not norm.isalpha():
        raise InvalidLetterError(f'Guess "{letter}" must be a single letter')
    return norm


def normalize_word(word: str) -> str:
    """Lower-case a word; it must be non-empty and letters only."""
    norm = (word or "").strip().lower()
    if not norm or not norm.isalpha():
        raise InvalidWordError(f'Word "{word}" must be a non-empty word of letters')
    return norm


def is_master(room: "Room", pid: Optional[str]) -> bool:
    """Check if player is the room master."""
    return pid is not None and room.master_id == pid


def is_turn_holder(room: "Room", pid: Optional[str]) -> bool:
    """Check if player currently holds the turn."""
    return pid is not None and room.current_turn == pid


def ensure_master(room: "Room", pid: Optional[str]) -> None:
    if not is_master(room, pid):
        raise NotMasterError(pid)


def ensure_turn_holder(room: "Room", pid: Optional[str]) -> None:
    if not is_turn_holder(room, pid):
        raise NotTurnHolderError(pid)
