from __future__ import annotations

from typing import List

from app.domain.room.entity import Room
from app.transport.protocols import (
    OutgoingEvent,
    OutGameFinished,
    OutNewGuess,
    OutPlayerUpdated,
)


async def finish_if_complete(registry, room: Room) -> List[OutgoingEvent]:
    """
    Finish sequence, run right after a guess has been applied.
    Returns [] while the word is still open. Otherwise: one synthetic
    new_guess per letter in word order, then game_finished, then the
    credited player's update. The caller must not advance the turn.
    """
    finish = await registry.check_game_finished(room.id)
    if finish is None:
        return []

    events: List[OutgoingEvent] = [OutNewGuess(guess=g) for g in room.reveal_word()]
    events.append(OutGameFinished(finish=finish))
    if finish.player is not None:
        events.append(OutPlayerUpdated(player=finish.player))
    return events
