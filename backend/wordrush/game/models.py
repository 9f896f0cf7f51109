from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Literal

from .timers import TimerHandle
from .turns import TurnScheduler


RoomStatus = Literal["waiting", "playing", "finished"]
TurnPhase = Literal["awaiting_word", "guessing", "settling"]


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class Player:
    id: str
    name: str
    score: int = 0
    is_host: bool = False
    streak: int = 0
    best_streak: int = 0
    achievements: list[dict] = field(default_factory=list)
    avatar: str = ""

    def achievement_ids(self) -> list[str]:
        return [a["id"] for a in self.achievements]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "isHost": self.is_host,
            "streak": self.streak,
            "bestStreak": self.best_streak,
            "achievements": list(self.achievements),
            "avatar": self.avatar,
        }


@dataclass
class CorrectGuess:
    player_id: str
    timestamp_ms: int


@dataclass
class Room:
    id: str
    name: str
    is_public: bool = True
    time_per_round: int = 60
    max_players: int = 8
    difficulty: str = "medium"
    max_rounds: int = 5
    status: RoomStatus = "waiting"
    phase: TurnPhase | None = None
    players: list[Player] = field(default_factory=list)
    turns: TurnScheduler = field(default_factory=TurnScheduler)
    current_word: str = ""
    scrambled_word: str = ""
    hint: str = ""
    round_started_at_ms: int | None = None
    correct_guesses: list[CorrectGuess] = field(default_factory=list)
    round_scores: dict[str, int] = field(default_factory=dict)
    chat_history: list[dict] = field(default_factory=list)
    leaderboard: list[dict] = field(default_factory=list)
    timer: TimerHandle | None = None
    destroyed: bool = False

    @property
    def current_round(self) -> int:
        return self.turns.round

    @property
    def setter_id(self) -> str | None:
        if self.status != "playing":
            return None
        return self.turns.current

    def get_player(self, player_id: str) -> Player | None:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def has_guessed(self, player_id: str) -> bool:
        return any(g.player_id == player_id for g in self.correct_guesses)

    @property
    def host(self) -> Player | None:
        for p in self.players:
            if p.is_host:
                return p
        return None


def room_summary(room: Room) -> dict:
    return {
        "id": room.id,
        "name": room.name,
        "players": len(room.players),
        "maxPlayers": room.max_players,
        "difficulty": room.difficulty,
    }


def room_public_state(room: Room) -> dict:
    # The secret word stays hidden until the turn settles.
    reveal = room.status == "finished" or room.phase == "settling"
    return {
        "id": room.id,
        "name": room.name,
        "isPublic": room.is_public,
        "timePerRound": room.time_per_round,
        "maxPlayers": room.max_players,
        "difficulty": room.difficulty,
        "status": room.status,
        "phase": room.phase,
        "currentRound": room.current_round,
        "maxRounds": room.max_rounds,
        "currentPlayerIndex": room.turns.index,
        "currentPlayerId": room.setter_id,
        "turnOrder": list(room.turns.order),
        "players": [p.to_dict() for p in room.players],
        "scores": {p.id: p.score for p in room.players},
        "roundScores": dict(room.round_scores),
        "streaks": {p.id: p.streak for p in room.players},
        "achievements": {p.id: list(p.achievements) for p in room.players},
        "scrambledWord": room.scrambled_word,
        "wordLength": len(room.current_word),
        "currentWord": room.current_word if reveal else None,
        "roundStartTime": room.round_started_at_ms,
        "correctGuesses": [
            {"playerId": g.player_id, "timestamp": g.timestamp_ms} for g in room.correct_guesses
        ],
        "leaderboard": list(room.leaderboard),
    }
