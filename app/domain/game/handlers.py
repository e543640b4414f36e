# app/domain/game/handlers.py
from __future__ import annotations

from app.domain.game.handlers_lobby import (
    handle_create_room,
    handle_get_room,
    handle_restart,
    handle_join,
    handle_leave,
    handle_disconnect,
)
from app.domain.game.handlers_word import handle_set_word, handle_word_guess
from app.domain.game.handlers_guess import handle_new_guess

__all__ = [
    "handle_create_room",
    "handle_get_room",
    "handle_restart",
    "handle_join",
    "handle_leave",
    "handle_disconnect",
    "handle_set_word",
    "handle_word_guess",
    "handle_new_guess",
]
