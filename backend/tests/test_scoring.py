import pytest

from wordrush.game import achievements, scoring


def test_position_weighted_scores():
    assert scoring.score(1, 5) == 60
    assert scoring.score(2, 5) == 58
    assert scoring.score(3, 5) == 55
    assert scoring.score(7, 5) == 55


def test_length_scaling_is_constant_across_positions():
    for position in (1, 2, 3, 4):
        assert scoring.score(position, 8) - scoring.score(position, 7) == 10


def test_completion_bonus_scores_setter_as_second():
    assert scoring.completion_bonus(5) == scoring.score(2, 5) == 58


def test_hint_cost_floors_at_zero():
    assert scoring.apply_hint_cost(25) == 15
    assert scoring.apply_hint_cost(4) == 0
    assert scoring.apply_hint_cost(0) == 0


def test_position_must_be_one_based():
    with pytest.raises(ValueError):
        scoring.score(0, 5)


def test_first_correct_unlocks_once():
    first = achievements.evaluate([], 60, 1)
    assert [a["id"] for a in first] == ["first-correct"]
    assert achievements.evaluate(["first-correct"], 60, 2) == []


def test_high_scorer_threshold():
    ids = [a["id"] for a in achievements.evaluate(["first-correct"], 100, 1)]
    assert ids == ["high-scorer"]
    assert achievements.evaluate(["first-correct"], 99, 1) == []


def test_streak_rules_fire_on_exact_values():
    have = ["first-correct"]
    assert achievements.evaluate(have, 50, 2) == []
    assert [a["id"] for a in achievements.evaluate(have, 50, 3)] == ["streak-3"]
    assert achievements.evaluate(have, 50, 4) == []
    assert [a["id"] for a in achievements.evaluate(have, 50, 5)] == ["streak-5"]


def test_streak_3_never_repeats():
    have = ["first-correct", "streak-3"]
    assert achievements.evaluate(have, 50, 3) == []


def test_achievement_records_carry_display_fields():
    (record,) = achievements.evaluate([], 10, 1)
    assert record["name"] == "First Success"
    assert set(record) == {"id", "name", "description", "icon"}
