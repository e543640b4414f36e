from __future__ import annotations

from .handlers import (
    handle_create_room,
    handle_get_room,
    handle_restart,
    handle_join,
    handle_leave,
    handle_disconnect,
    handle_set_word,
    handle_word_guess,
    handle_new_guess,
)

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
