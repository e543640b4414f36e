from itertools import permutations

import pytest

from app.domain.common.errors import (
    DuplicateGuessError,
    GameStateError,
    InvalidLetterError,
    InvalidWordError,
    NoEligibleGuesserError,
    NotMasterError,
)
from app.domain.room.entity import Room
from app.store.models import PlayerStore


def _room(*guessers):
    room = Room("R1", PlayerStore(pid="m", name="M"))
    for pid in guessers:
        room.add_player(PlayerStore(pid=pid, name=pid.upper()))
    return room


def _masters(room):
    return [p.pid for p in room.players if room.master_id == p.pid]


def test_new_room_waits_for_word_with_master_in_turn():
    room = _room()
    assert room.round == 0
    assert room.state == "AWAITING_WORD"
    assert room.master_id == "m"
    assert room.current_turn == "m"


def test_set_word_stores_lowercase_letters_unguessed():
    room = _room("g")
    room.set_word("m", "Cat")
    assert room.state == "IN_PROGRESS"
    assert [(s.letter, s.guessed) for s in room.current_word] == [("c", False), ("a", False), ("t", False)]
    assert room.guessed_letters == set()


def test_set_word_rejections_leave_room_untouched():
    room = _room("g")
    with pytest.raises(NotMasterError):
        room.set_word("g", "cat")
    with pytest.raises(InvalidWordError):
        room.set_word("m", "")
    with pytest.raises(InvalidWordError):
        room.set_word("m", "c4t")
    assert room.state == "AWAITING_WORD"

    room.set_word("m", "cat")
    with pytest.raises(GameStateError):
        room.set_word("m", "dog")
    assert room.word == "cat"


def test_set_word_needs_a_guesser():
    room = _room()
    with pytest.raises(NoEligibleGuesserError):
        room.set_word("m", "cat")
    assert room.current_word == []


def test_turn_rotation_skips_master_and_wraps():
    room = _room("a", "b")
    room.set_word("m", "cat")
    assert room.update_next_turn() == "a"
    assert room.update_next_turn() == "b"
    assert room.update_next_turn() == "a"


def test_turn_rotation_skips_master_in_the_middle():
    room = _room("a", "b")
    room.set_master("a")
    # turn still with "m" from creation
    assert room.update_next_turn() == "b"
    assert room.update_next_turn() == "m"
    assert room.update_next_turn() == "b"


def test_single_guesser_keeps_the_turn():
    room = _room("g")
    room.set_word("m", "cat")
    assert room.update_next_turn() == "g"
    assert room.update_next_turn() == "g"


def test_add_guess_awards_one_point_per_occurrence():
    room = _room("g")
    room.set_word("m", "banana")
    room.update_next_turn()

    info = room.add_guess("A", "g")
    assert info.letter == "a"
    assert info.hit is True
    assert info.positions == [1, 3, 5]
    assert info.points_awarded == 3
    assert room.get_player("g").points == 3

    miss = room.add_guess("z", "g")
    assert miss.hit is False
    assert miss.positions == []
    assert room.get_player("g").points == 3


def test_duplicate_letter_is_detected_case_insensitively():
    room = _room("g")
    room.set_word("m", "cat")
    room.add_guess("c", "g")
    assert room.check_guess_is_present("C") is True
    assert room.check_guess_is_present("a") is False
    with pytest.raises(DuplicateGuessError):
        room.add_guess("C", "g")


def test_add_guess_rejects_non_letters():
    room = _room("g")
    room.set_word("m", "cat")
    with pytest.raises(InvalidLetterError):
        room.add_guess("ab", "g")
    with pytest.raises(InvalidLetterError):
        room.add_guess("1", "g")


def test_add_guess_requires_word_in_progress():
    room = _room("g")
    with pytest.raises(GameStateError):
        room.add_guess("c", "g")


def test_master_cannot_guess_letters_and_room_is_unchanged():
    room = _room("g")
    room.set_word("m", "cat")
    room.remove_player("g")
    assert room.current_turn is None
    room.give_turn_to_master()

    with pytest.raises(GameStateError):
        room.add_guess("c", "m")
    with pytest.raises(GameStateError):
        room.add_guess("a")
    assert room.guessed_letters == set()
    assert room.get_player("m").points == 0
    assert not any(slot.guessed for slot in room.current_word)


def test_cat_scenario_finishes_once_with_guesser_credited():
    room = _room("g")
    room.set_word("m", "cat")
    assert room.update_next_turn() == "g"

    c = room.add_guess("c", "g")
    assert c.positions == [0]
    assert room.take_finish() is None
    assert room.update_next_turn() == "g"

    room.add_guess("a", "g")
    room.add_guess("t", "g")
    assert room.state == "FINISHED"
    assert room.take_finish() == ("g", "WORD_REVEALED")
    assert room.take_finish() is None


@pytest.mark.parametrize("order", list(permutations("ban")))
def test_guessing_every_letter_always_finishes(order):
    room = _room("g")
    room.restart_game()
    room.set_word("m", "banana")
    for letter in order:
        assert room.state == "IN_PROGRESS"
        room.add_guess(letter, "g")
    assert room.state == "FINISHED"
    assert room.take_finish() is not None


def test_word_guess_correct_reveals_and_credits_hidden_letters():
    room = _room("g", "h")
    room.set_word("m", "cat")
    room.add_guess("c", "g")

    wrong = room.check_word_guess("h", "dog")
    assert wrong.correct is False
    assert room.state == "IN_PROGRESS"

    right = room.check_word_guess("h", " CAT ")
    assert right.correct is True
    assert right.points_awarded == 2
    assert room.get_player("h").points == 2
    assert room.state == "FINISHED"
    assert room.take_finish() == ("h", "WORD_GUESSED")


def test_word_guess_rejections():
    room = _room("g")
    with pytest.raises(GameStateError):
        room.check_word_guess("g", "cat")
    room.set_word("m", "cat")
    with pytest.raises(GameStateError):
        room.check_word_guess("m", "cat")
    with pytest.raises(InvalidWordError):
        room.check_word_guess("g", "c4t")


def test_reveal_word_is_synthetic_and_in_word_order():
    room = _room("g")
    room.set_word("m", "cat")
    room.add_guess("a", "g")
    reveals = room.reveal_word()
    assert [(r.letter, r.positions) for r in reveals] == [("c", [0]), ("a", [1]), ("t", [2])]
    assert all(r.synthetic and r.points_awarded == 0 for r in reveals)
    assert room.get_player("g").points == 1
    assert room.is_word_complete() is True


def test_restart_keeps_players_and_points():
    room = _room("g")
    room.set_word("m", "cat")
    room.check_word_guess("g", "cat")
    room.take_finish()

    room.restart_game()
    assert room.round == 1
    assert room.state == "AWAITING_WORD"
    assert room.guessed_letters == set()
    assert room.current_turn == "m"
    assert room.get_player("g").points == 3

    room.set_word("m", "dog")
    room.check_word_guess("g", "dog")
    assert room.take_finish() == ("g", "WORD_GUESSED")


def test_restart_can_rotate_master():
    room = _room("a", "b")
    room.restart_game(rotate_master=True)
    assert room.master_id == "a"
    assert room.current_turn == "a"
    room.restart_game(rotate_master=True)
    room.restart_game(rotate_master=True)
    assert room.master_id == "m"


def test_removed_turn_holder_passes_turn_to_next_guesser():
    room = _room("a", "b", "c")
    room.set_word("m", "cat")
    assert room.update_next_turn() == "a"

    player, position = room.remove_player("a")
    assert player.pid == "a"
    assert position == 1
    assert room.current_turn is None
    assert room.update_next_turn() == "b"


def test_removed_last_turn_holder_wraps_past_master():
    room = _room("a", "b")
    room.set_word("m", "cat")
    room.update_next_turn()
    assert room.update_next_turn() == "b"
    room.remove_player("b")
    assert room.update_next_turn() == "a"


def test_leaving_master_is_succeeded_in_join_order():
    room = _room("a", "b")
    room.remove_player("m")
    assert room.master_id == "a"
    assert _masters(room) == ["a"]

    room.remove_player("a")
    room.remove_player("b")
    assert room.master_id is None
    assert room.current_turn is None

    room.add_player(PlayerStore(pid="z", name="Z"))
    assert room.master_id == "z"
    assert room.current_turn == "z"


def test_exactly_one_master_through_membership_changes():
    room = _room("a", "b", "c")
    for pid in ("b", "m", "c"):
        room.remove_player(pid)
        assert len(_masters(room)) == 1
    room.add_player(PlayerStore(pid="d", name="D"))
    room.set_master("d")
    assert _masters(room) == ["d"]
