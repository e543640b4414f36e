from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from app.domain.common.end_game import finish_if_complete
from app.domain.common.errors import DuplicateGuessError, GameStateError
from app.domain.common.validation import ensure_turn_holder, normalize_letter
from app.domain.room.results import GuessInfo
from app.transport.protocols import InGuess, OutgoingEvent, OutNewGuess, OutNewTurn

logger = logging.getLogger(__name__)

Outgoing = List[OutgoingEvent]


async def handle_new_guess(*, app, room_id: str, pid: Optional[str], msg: InGuess) -> Tuple[GuessInfo, Outgoing]:
    """
    Letter guess by the turn holder.
    Order: guess result, then either the finish sequence or the next turn.
    """
    logger.info(f"new-guess {room_id}, {msg.letter}")
    registry = app.state.registry

    room = await registry.get_room_by_id(room_id)
    ensure_turn_holder(room, pid)
    if room.state != "IN_PROGRESS":
        raise GameStateError("No word is being guessed")
    if room.check_guess_is_present(msg.letter):
        raise DuplicateGuessError(normalize_letter(msg.letter))

    guess = room.add_guess(msg.letter, pid)
    events: Outgoing = [OutNewGuess(guess=guess)]

    finish_events = await finish_if_complete(registry, room)
    if finish_events:
        events.extend(finish_events)
    else:
        events.append(OutNewTurn(player_id=room.update_next_turn()))
    return guess, events
