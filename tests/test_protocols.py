import pytest
from pydantic import ValidationError

from app.domain.common.errors import InvalidLetterError, InvalidWordError
from app.domain.common.validation import normalize_letter, normalize_word
from app.transport.protocols import InGuess, InSetWord, InUser, OutNewTurn, dump_event


def test_guess_body_is_one_character():
    assert InGuess(letter="a").letter == "a"
    with pytest.raises(ValidationError):
        InGuess(letter="ab")
    with pytest.raises(ValidationError):
        InGuess(letter="")


def test_user_and_word_bodies_need_content():
    with pytest.raises(ValidationError):
        InUser(name="")
    with pytest.raises(ValidationError):
        InSetWord(word="")
    with pytest.raises(ValidationError):
        InSetWord(word="x" * 51)


def test_normalize_letter():
    assert normalize_letter(" Q ") == "q"
    with pytest.raises(InvalidLetterError):
        normalize_letter("7")


def test_normalize_word():
    assert normalize_word("Hangman") == "hangman"
    with pytest.raises(InvalidWordError):
        normalize_word("two words")
    with pytest.raises(InvalidWordError):
        normalize_word("   ")


def test_dump_event_carries_type():
    assert dump_event(OutNewTurn(player_id="p1")) == {"type": "new_turn", "player_id": "p1"}
