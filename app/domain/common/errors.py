"""
Game errors.

Every error is request-local: it is raised before any state mutation and the
HTTP layer renders it through a single exception handler using `code` and
`status_code`.
"""
from __future__ import annotations


class GameError(Exception):
    """Base for all game errors."""
    code: str = "GAME_ERROR"
    status_code: int = 400


# ============ Lookup ============

class RoomNotFoundError(GameError):
    code = "ROOM_NOT_FOUND"
    status_code = 404

    def __init__(self, room_id: str):
        self.room_id = room_id
        super().__init__(f"Room {room_id} not found")


class PlayerNotFoundError(GameError):
    code = "PLAYER_NOT_FOUND"
    status_code = 404

    def __init__(self, room_id: str, player_id: str):
        self.room_id = room_id
        self.player_id = player_id
        super().__init__(f"Player {player_id} not found in room {room_id}")


# ============ Input ============

class DuplicateGuessError(GameError):
    code = "DUPLICATE_GUESS"
    status_code = 400

    def __init__(self, letter: str):
        self.letter = letter
        super().__init__(f'Letter "{letter}" already guessed')


class InvalidWordError(GameError):
    code = "INVALID_WORD"
    status_code = 400


class InvalidLetterError(GameError):
    code = "INVALID_LETTER"
    status_code = 400


# ============ Guards ============

class NotTurnHolderError(GameError):
    code = "NOT_TURN_HOLDER"
    status_code = 403

    def __init__(self, player_id: str | None):
        self.player_id = player_id
        super().__init__(f"Player {player_id} is not in turn")


class NotMasterError(GameError):
    code = "NOT_MASTER"
    status_code = 403

    def __init__(self, player_id: str | None):
        self.player_id = player_id
        super().__init__(f"Player {player_id} is not the room master")


# ============ State ============

class GameStateError(GameError):
    """Operation not allowed in the room's current state."""
    code = "BAD_STATE"
    status_code = 409


class NoEligibleGuesserError(GameError):
    code = "NO_GUESSERS"
    status_code = 409

    def __init__(self, room_id: str):
        self.room_id = room_id
        super().__init__(f"Room {room_id} has no player besides the master")
