import random

import pytest

from wordrush.game import words
from wordrush.game.turns import TurnScheduler


def test_scramble_is_a_different_permutation():
    rng = random.Random(7)
    for word in ("ocean", "ab", "javascript", "noon"):
        scrambled = words.scramble(word, rng)
        assert scrambled != word
        assert sorted(scrambled) == sorted(word)


def test_scramble_rejects_single_letter_words():
    assert not words.can_scramble("aaa")
    with pytest.raises(ValueError):
        words.scramble("aaa")


def test_hint_uses_table_then_falls_back():
    assert words.hint("Ocean") == "Large body of salt water"
    assert words.hint("zebra") == "A word with 5 letters"


def test_pick_words_respects_category():
    picked = words.pick_words(4, "animals")
    assert len(picked) == 4
    assert set(picked) <= set(words.WORD_CATEGORIES["animals"])


def test_reshuffle_keeps_members_and_resets_pointer():
    turns = TurnScheduler(rng=random.Random(1))
    turns.start(["a", "b", "c", "d"])
    assert turns.round == 1
    assert sorted(turns.order) == ["a", "b", "c", "d"]
    assert turns.index == 0


def test_advance_reports_end_of_order():
    turns = TurnScheduler(order=["a", "b"])
    assert turns.advance() is False
    assert turns.current == "b"
    assert turns.advance() is True
    assert turns.current is None


def test_remove_before_pointer_keeps_current_holder():
    turns = TurnScheduler(order=["a", "b", "c"], index=2)
    assert turns.remove("a") is False
    assert turns.current == "c"


def test_remove_current_holder_steps_back():
    turns = TurnScheduler(order=["a", "b", "c"], index=1)
    assert turns.remove("b") is True
    turns.advance()
    assert turns.current == "c"


def test_remove_first_holder_then_advance_lands_on_successor():
    turns = TurnScheduler(order=["a", "b", "c"], index=0)
    assert turns.remove("a") is True
    assert turns.advance() is False
    assert turns.current == "b"


def test_remove_outside_play_keeps_pointer_on_a_slot():
    turns = TurnScheduler(order=["a", "b"], index=0)
    assert turns.remove("a", active=False) is True
    assert turns.index == 0
    assert turns.current == "b"

    turns = TurnScheduler(order=["a", "b"], index=1)
    turns.remove("b", active=False)
    assert turns.index == 0


def test_remove_unknown_is_noop():
    turns = TurnScheduler(order=["a"], index=0)
    assert turns.remove("zzz") is False
    assert turns.order == ["a"]
