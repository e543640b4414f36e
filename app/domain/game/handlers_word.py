from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from app.domain.common.end_game import finish_if_complete
from app.domain.common.errors import InvalidWordError
from app.domain.common.validation import ensure_turn_holder
from app.domain.room.results import WordGuessInfo, masked_word
from app.transport.protocols import (
    InSetWord,
    InWordGuess,
    OutgoingEvent,
    OutNewTurn,
    OutNewWordGuess,
    OutWordSet,
)

logger = logging.getLogger(__name__)

Outgoing = List[OutgoingEvent]


async def handle_set_word(*, app, room_id: str, pid: Optional[str], msg: InSetWord) -> Tuple[str, Outgoing]:
    """
    Master sets the secret word while holding the turn.
    Subscribers get the masked word, then the first guesser's turn.
    """
    logger.info(f"set-word {room_id} by {pid}")
    registry = app.state.registry
    settings = app.state.settings

    room = await registry.get_room_by_id(room_id)
    ensure_turn_holder(room, pid)
    if len(msg.word.strip()) > settings.MAX_WORD_LEN:
        raise InvalidWordError(f"Word is longer than {settings.MAX_WORD_LEN} letters")

    room.set_word(pid, msg.word)
    events: Outgoing = [
        OutWordSet(word=masked_word(room)),
        OutNewTurn(player_id=room.update_next_turn()),
    ]
    return msg.word, events


async def handle_word_guess(*, app, room_id: str, pid: str, msg: InWordGuess) -> Tuple[WordGuessInfo, Outgoing]:
    """
    Whole-word guess. Open to any guesser unless WORD_GUESS_REQUIRES_TURN.
    Never advances the turn; a correct guess runs the finish sequence.
    """
    logger.info(f"word-guess {room_id} by {pid}")
    registry = app.state.registry
    settings = app.state.settings

    room = await registry.get_room_by_id(room_id)
    if settings.WORD_GUESS_REQUIRES_TURN:
        ensure_turn_holder(room, pid)

    result = room.check_word_guess(pid, msg.word)
    events = await finish_if_complete(registry, room)
    if not events:
        events = [OutNewWordGuess(word=result.word, player_id=pid)]
    return result, events
