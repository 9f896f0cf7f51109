from __future__ import annotations

import random
from dataclasses import dataclass, field


@dataclass
class TurnScheduler:
    """Turn order, current-turn pointer and round counter for one room.

    ``order`` holds player ids. It is reshuffled once per round, never per
    turn, and is independent of the room's join order.
    """

    order: list[str] = field(default_factory=list)
    index: int = 0
    round: int = 0
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.order)

    @property
    def current(self) -> str | None:
        if 0 <= self.index < len(self.order):
            return self.order[self.index]
        return None

    def append(self, player_id: str) -> None:
        if player_id not in self.order:
            self.order.append(player_id)

    def reshuffle(self, player_ids: list[str]) -> None:
        order = list(player_ids)
        # random.shuffle is Fisher-Yates, so every permutation is equally likely.
        self.rng.shuffle(order)
        self.order = order
        self.index = 0

    def start(self, player_ids: list[str]) -> None:
        self.round = 1
        self.reshuffle(player_ids)

    def advance(self) -> bool:
        """Move to the next turn; True when the pointer ran past the end."""
        self.index += 1
        return self.index >= len(self.order)

    def remove(self, player_id: str, active: bool = True) -> bool:
        """Drop a player; True if they held the current turn.

        While ``active`` and the current holder leaves, the pointer steps
        back one slot so the following ``advance`` lands on their successor.
        Otherwise the pointer keeps addressing a real slot.
        """
        if player_id not in self.order:
            return False
        pos = self.order.index(player_id)
        del self.order[pos]
        held_turn = pos == self.index
        if pos < self.index or (held_turn and active):
            self.index -= 1
        if self.index >= len(self.order):
            self.index = 0
        return held_turn
