from __future__ import annotations

from typing import Optional

from app.domain.room.entity import Room


def settle_turn(room: Room) -> Optional[str]:
    """
    Hand the turn to whoever should hold it after a membership change.
    - waiting for a word (or already finished): the master
    - word in progress: the next guesser, or the master when none is left
    """
    if not room.players:
        return None
    if room.state != "IN_PROGRESS" or not room.guessers():
        return room.give_turn_to_master()
    return room.update_next_turn()
