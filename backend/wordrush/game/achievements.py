from __future__ import annotations

from collections.abc import Iterable

FIRST_CORRECT = "first-correct"
HIGH_SCORER = "high-scorer"
STREAK_3 = "streak-3"
STREAK_5 = "streak-5"

HIGH_SCORE_THRESHOLD = 100

CATALOG: dict[str, dict] = {
    FIRST_CORRECT: {
        "id": FIRST_CORRECT,
        "name": "First Success",
        "description": "Got your first word correct!",
        "icon": "\U0001F3AF",
    },
    HIGH_SCORER: {
        "id": HIGH_SCORER,
        "name": "High Scorer",
        "description": "Scored 100+ points in a single guess!",
        "icon": "⭐",
    },
    STREAK_3: {
        "id": STREAK_3,
        "name": "On Fire",
        "description": "Got 3 words correct in a row!",
        "icon": "\U0001F525",
    },
    STREAK_5: {
        "id": STREAK_5,
        "name": "Unstoppable",
        "description": "Got 5 words correct in a row!",
        "icon": "\U0001F680",
    },
}


def evaluate(unlocked: Iterable[str], score: int, streak: int) -> list[dict]:
    """Return the achievements newly unlocked by one scoring event.

    Each rule fires at most once per player; ids already in ``unlocked``
    are skipped. Streak rules fire only on the exact value, so a streak
    that later climbs back to 3 after a reset unlocks nothing new.
    """
    have = set(unlocked)
    candidates = [FIRST_CORRECT]
    if score >= HIGH_SCORE_THRESHOLD:
        candidates.append(HIGH_SCORER)
    if streak == 3:
        candidates.append(STREAK_3)
    if streak == 5:
        candidates.append(STREAK_5)
    return [dict(CATALOG[a]) for a in candidates if a not in have]
