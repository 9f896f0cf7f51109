"""Position- and length-weighted scoring.

Speed (guess position) and word difficulty (length) are rewarded
independently. The word-setter reuses the same table: completing a turn
pays the setter as if they finished second.
"""

from __future__ import annotations

POSITION_BASE = {1: 10, 2: 8}
LATE_POSITION_BASE = 5
LENGTH_MULTIPLIER = 10

NO_GUESS_BONUS = 5
HINT_COST = 10


def score(position: int, word_length: int) -> int:
    if position < 1:
        raise ValueError(f"position must be 1-based, got {position}")
    return POSITION_BASE.get(position, LATE_POSITION_BASE) + LENGTH_MULTIPLIER * word_length


def completion_bonus(word_length: int) -> int:
    return score(2, word_length)


def apply_hint_cost(current: int, cost: int = HINT_COST) -> int:
    return max(0, current - cost)
