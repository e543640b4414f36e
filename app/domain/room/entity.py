# app/domain/room/entity.py
from __future__ import annotations

from typing import List, Optional, Set, Tuple

from app.domain.common.errors import (
    DuplicateGuessError,
    GameStateError,
    NoEligibleGuesserError,
    PlayerNotFoundError,
)
from app.domain.common.types import FinishReason, RoomState
from app.domain.common.validation import ensure_master, normalize_letter, normalize_word
from app.domain.room.results import GuessInfo, WordGuessInfo
from app.store.models import LetterStore, PlayerStore


class Room:
    """
    One hangman room and its state machine.

    AWAITING_WORD -> IN_PROGRESS (set_word) -> FINISHED (every letter guessed)
    restart_game() returns to AWAITING_WORD with round + 1.

    Player order is join order and doubles as turn order. Methods check all
    preconditions before touching state, so a raised error leaves the room
    unchanged. The room does no locking; callers serialize access per room.
    """

    def __init__(self, room_id: str, master: PlayerStore, created_at: int = 0):
        self.id = room_id
        self.round = 0
        self.created_at = created_at
        self.players: List[PlayerStore] = [master]
        self.master_id: Optional[str] = master.pid
        self.current_turn: Optional[str] = master.pid
        self.current_word: List[LetterStore] = []
        self.guessed_letters: Set[str] = set()

        self._credited_pid: Optional[str] = None
        self._finish_reason: FinishReason = "WORD_REVEALED"
        self._finish_reported = False
        # position left behind by a turn holder who left the room
        self._vacated_index: Optional[int] = None

    # ----------------------------
    # Queries
    # ----------------------------
    @property
    def state(self) -> RoomState:
        if not self.current_word:
            return "AWAITING_WORD"
        if self.is_word_complete():
            return "FINISHED"
        return "IN_PROGRESS"

    @property
    def word(self) -> str:
        return "".join(slot.letter for slot in self.current_word)

    def get_player(self, pid: str) -> Optional[PlayerStore]:
        for p in self.players:
            if p.pid == pid:
                return p
        return None

    def require_player(self, pid: str) -> PlayerStore:
        player = self.get_player(pid)
        if player is None:
            raise PlayerNotFoundError(self.id, pid)
        return player

    def guessers(self) -> List[PlayerStore]:
        return [p for p in self.players if p.pid != self.master_id]

    def is_word_complete(self) -> bool:
        return bool(self.current_word) and all(slot.guessed for slot in self.current_word)

    def check_guess_is_present(self, letter: str) -> bool:
        return normalize_letter(letter) in self.guessed_letters

    def _index(self, pid: Optional[str]) -> Optional[int]:
        for i, p in enumerate(self.players):
            if p.pid == pid:
                return i
        return None

    # ----------------------------
    # Membership
    # ----------------------------
    def add_player(self, player: PlayerStore) -> PlayerStore:
        self.players.append(player)
        if self.master_id is None:
            # room was empty: the joiner takes over
            self.master_id = player.pid
            self.current_turn = player.pid
        return player

    def remove_player(self, pid: str) -> Tuple[PlayerStore, int]:
        """
        Remove a player. Returns (player, former position).
        A leaving master is succeeded by the next player in join order.
        """
        idx = self._index(pid)
        if idx is None:
            raise PlayerNotFoundError(self.id, pid)

        player = self.players.pop(idx)
        if self.current_turn == pid:
            self.current_turn = None
            self._vacated_index = idx

        if self.master_id == pid:
            self.master_id = self.players[idx % len(self.players)].pid if self.players else None

        if not self.players:
            self.current_turn = None
            self._vacated_index = None
        return player, idx

    def set_master(self, pid: str) -> Optional[str]:
        """Hand the master role to `pid`. Returns the previous master id."""
        self.require_player(pid)
        previous = self.master_id
        self.master_id = pid
        return previous

    # ----------------------------
    # Turns
    # ----------------------------
    def update_next_turn(self) -> str:
        """
        Move the turn to the next guesser in join order, skipping the master
        and wrapping around. Returns the new turn holder id.
        """
        n = len(self.players)
        idx = self._index(self.current_turn)
        if idx is not None:
            start = idx + 1
        elif self._vacated_index is not None:
            start = self._vacated_index
        else:
            start = 0

        for k in range(n):
            candidate = self.players[(start + k) % n]
            if candidate.pid != self.master_id:
                self.current_turn = candidate.pid
                self._vacated_index = None
                return candidate.pid
        raise NoEligibleGuesserError(self.id)

    def give_turn_to_master(self) -> Optional[str]:
        self.current_turn = self.master_id
        self._vacated_index = None
        return self.current_turn

    # ----------------------------
    # Word + guesses
    # ----------------------------
    def set_word(self, pid: str, word: str) -> None:
        ensure_master(self, pid)
        if self.state != "AWAITING_WORD":
            raise GameStateError("A word is already set for this round")
        norm = normalize_word(word)
        if not self.guessers():
            raise NoEligibleGuesserError(self.id)

        self.current_word = [LetterStore(letter=ch) for ch in norm]
        self.guessed_letters = set()
        self._credited_pid = None
        self._finish_reason = "WORD_REVEALED"
        self._finish_reported = False

    def add_guess(self, letter: str, pid: Optional[str] = None) -> GuessInfo:
        """
        Reveal every occurrence of `letter`. The acting player (turn holder
        unless given) earns one point per revealed occurrence.
        """
        if self.state != "IN_PROGRESS":
            raise GameStateError("No word is being guessed")
        norm = normalize_letter(letter)
        if norm in self.guessed_letters:
            raise DuplicateGuessError(norm)
        acting = pid or self.current_turn
        if acting is not None and acting == self.master_id:
            raise GameStateError("The master cannot guess letters of their own word")

        positions = [i for i, slot in enumerate(self.current_word) if slot.letter == norm]
        for i in positions:
            self.current_word[i].guessed = True
        self.guessed_letters.add(norm)

        awarded = 0
        player = self.get_player(acting) if acting else None
        if positions and player is not None:
            awarded = len(positions)
            player.points += awarded
            self._credited_pid = player.pid
            self._finish_reason = "WORD_REVEALED"

        return GuessInfo(
            letter=norm,
            hit=bool(positions),
            positions=positions,
            player_id=acting,
            points_awarded=awarded,
        )

    def check_word_guess(self, pid: str, word: str) -> WordGuessInfo:
        """
        Whole-word attempt. A correct guess reveals the word and earns one
        point per letter that was still hidden.
        """
        if self.state != "IN_PROGRESS":
            raise GameStateError("No word is being guessed")
        player = self.require_player(pid)
        if pid == self.master_id:
            raise GameStateError("The master cannot guess their own word")
        norm = normalize_word(word)

        if norm != self.word:
            return WordGuessInfo(word=norm, correct=False, player_id=pid)

        hidden = [slot for slot in self.current_word if not slot.guessed]
        for slot in hidden:
            slot.guessed = True
        player.points += len(hidden)
        self._credited_pid = pid
        self._finish_reason = "WORD_GUESSED"
        return WordGuessInfo(word=norm, correct=True, player_id=pid, points_awarded=len(hidden))

    def reveal_word(self) -> List[GuessInfo]:
        """Synthetic guesses uncovering every letter, in word order. No points."""
        reveals: List[GuessInfo] = []
        for i, slot in enumerate(self.current_word):
            slot.guessed = True
            self.guessed_letters.add(slot.letter)
            reveals.append(GuessInfo(letter=slot.letter, hit=True, positions=[i], synthetic=True))
        return reveals

    def take_finish(self) -> Optional[Tuple[Optional[str], FinishReason]]:
        """
        (credited player id, reason) the first time the word is seen complete,
        None afterwards until the next set_word.
        """
        if not self.is_word_complete() or self._finish_reported:
            return None
        self._finish_reported = True
        return self._credited_pid, self._finish_reason

    # ----------------------------
    # Rounds
    # ----------------------------
    def restart_game(self, rotate_master: bool = False) -> None:
        self.round += 1
        self.current_word = []
        self.guessed_letters = set()
        self._credited_pid = None
        self._finish_reason = "WORD_REVEALED"
        self._finish_reported = False

        if rotate_master and len(self.players) > 1:
            idx = self._index(self.master_id)
            nxt = 0 if idx is None else (idx + 1) % len(self.players)
            self.master_id = self.players[nxt].pid
        self.give_turn_to_master()
