from __future__ import annotations

import logging
from collections.abc import Callable
from threading import RLock

from ..config import Config
from ..realtime import events as ev
from . import achievements, scoring, words
from .errors import (
    AlreadyGuessed,
    InvalidState,
    NotEnoughPlayers,
    NotHost,
    NotInRoom,
    NotYourTurn,
    OwnWord,
    WordNotScramblable,
    WordTooShort,
)
from .models import CorrectGuess, Player, Room, now_ms, room_public_state
from .timers import TimerHandle, TimerKey

logger = logging.getLogger(__name__)


def new_round_notices(room: Room) -> list[tuple[str, str, dict | None]]:
    """Per-recipient announcements for the turn that is starting.

    Every player gets their own ``new-round`` carrying ``isYourTurn``; the
    word-setter additionally gets ``your-turn``.
    """
    setter_id = room.setter_id
    setter = room.get_player(setter_id) if setter_id else None
    notices: list[tuple[str, str, dict | None]] = []
    for p in room.players:
        notices.append(
            (
                p.id,
                ev.NEW_ROUND,
                {
                    "round": room.current_round,
                    "maxRounds": room.max_rounds,
                    "currentPlayerId": setter_id,
                    "currentPlayer": setter.name if setter else "",
                    "isYourTurn": p.id == setter_id,
                },
            )
        )
    if setter_id:
        notices.append((setter_id, ev.YOUR_TURN, None))
    return notices


def round_winner(room: Room) -> dict:
    """Highest this-round score; ties go to whoever joined first."""
    winner: Player | None = None
    best = 0
    for p in room.players:
        s = room.round_scores.get(p.id, 0)
        if winner is None or s > best:
            winner, best = p, s
    if winner is None:
        return {"playerId": None, "playerName": "", "score": 0}
    return {"playerId": winner.id, "playerName": winner.name, "score": best}


def build_leaderboard(room: Room) -> list[dict]:
    entries = [
        {
            "playerId": p.id,
            "name": p.name,
            "score": p.score,
            "achievements": list(p.achievements),
            "streak": p.streak,
            "bestStreak": p.best_streak,
        }
        for p in room.players
    ]
    # sorted() is stable: ties keep player-list order.
    return sorted(entries, key=lambda e: e["score"], reverse=True)


class GameEngine:
    """Room state machine: waiting -> playing -> finished.

    Every public method runs as one non-preemptible step under ``lock``
    (the registry holds it for inbound events; timer callbacks take it
    themselves). Methods validate first and raise ``GameError`` before
    touching any state.
    """

    def __init__(self, bus, scheduler, lock: RLock | None = None, settings=Config) -> None:
        self.bus = bus
        self.scheduler = scheduler
        self.lock = lock or RLock()
        self.settings = settings

    # ---- inbound operations ----

    def start_game(self, room: Room, player_id: str) -> None:
        player = self._member(room, player_id)
        if not player.is_host:
            raise NotHost()
        if room.status != "waiting":
            raise InvalidState("Game has already started or is finished")
        if len(room.players) < self.settings.MIN_PLAYERS:
            raise NotEnoughPlayers(f"Need at least {self.settings.MIN_PLAYERS} players to start")

        room.status = "playing"
        room.turns.start([p.id for p in room.players])
        room.round_scores = {p.id: 0 for p in room.players}
        self._reset_turn(room)
        logger.info(f"[game-start] room={room.id} order={room.turns.order}")

        self.bus.publish(room.id, ev.GAME_STARTED, room_public_state(room))
        self._announce_turn(room)
        self.bus.publish(room.id, ev.ROOM_UPDATED, room_public_state(room))

    def submit_word(self, room: Room, player_id: str, word) -> dict:
        self._member(room, player_id)
        if room.status != "playing":
            raise InvalidState("Game not in progress")
        if player_id != room.setter_id:
            raise NotYourTurn()
        if room.phase != "awaiting_word":
            raise InvalidState("A word was already submitted this turn")

        selected = str(word or "").strip().lower()
        min_len = self.settings.MIN_WORD_LENGTH
        if len(selected) < min_len:
            raise WordTooShort(f"Word must be at least {min_len} letters long")
        if not words.can_scramble(selected):
            raise WordNotScramblable()

        room.current_word = selected
        room.scrambled_word = words.scramble(selected)
        room.hint = words.hint(selected)
        room.round_started_at_ms = now_ms()
        room.correct_guesses = []
        room.phase = "guessing"
        self._arm(room, room.time_per_round, self._on_guess_timeout)
        logger.info(f"[word] room={room.id} round={room.current_round} setter={player_id} length={len(selected)}")

        payload = {
            "scrambledWord": room.scrambled_word,
            "round": room.current_round,
            "hint": room.hint,
            "wordLength": len(selected),
            "wordSetterId": player_id,
        }
        self.bus.publish(room.id, ev.WORD_SCRAMBLED, payload)
        return payload

    def submit_guess(self, room: Room, player_id: str, guess) -> dict | None:
        player = self._member(room, player_id)
        if room.status != "playing" or room.phase != "guessing":
            return None
        if player_id == room.setter_id:
            raise OwnWord()
        if room.has_guessed(player_id):
            raise AlreadyGuessed()

        if str(guess or "").strip().lower() != room.current_word:
            player.streak = 0
            self.bus.send(player_id, ev.INCORRECT_GUESS, guess)
            return {"correct": False}

        room.correct_guesses.append(CorrectGuess(player_id, now_ms()))
        position = len(room.correct_guesses)
        points = scoring.score(position, len(room.current_word))
        self._award(room, player, points)
        player.streak += 1
        player.best_streak = max(player.best_streak, player.streak)
        unlocked = achievements.evaluate(player.achievement_ids(), points, player.streak)
        player.achievements.extend(unlocked)

        result = {
            "playerId": player.id,
            "playerName": player.name,
            "word": room.current_word,
            "score": points,
            "streak": player.streak,
            "position": position,
        }
        self.bus.publish(room.id, ev.CORRECT_GUESS, result)
        if unlocked:
            self.bus.send(player_id, ev.ACHIEVEMENT_UNLOCKED, unlocked)

        if self._everyone_guessed(room):
            self._settle_all_guessed(room)
        return {"correct": True, **result}

    def use_hint(self, room: Room, player_id: str) -> dict | None:
        player = self._member(room, player_id)
        if room.status != "playing" or room.phase != "guessing":
            return None
        if player_id == room.setter_id:
            raise OwnWord("You cannot use hints for your own word")

        # No per-turn cap: every request pays again.
        player.score = scoring.apply_hint_cost(player.score)
        room.round_scores[player_id] = scoring.apply_hint_cost(room.round_scores.get(player_id, 0))
        payload = {"hint": room.hint, "cost": scoring.HINT_COST}
        self.bus.send(player_id, ev.HINT_USED, payload)
        return payload

    def send_message(self, room: Room, player_id: str, message) -> dict:
        player = self._member(room, player_id)
        msg = {
            "playerId": player.id,
            "playerName": player.name,
            "message": message,
            "timestamp": now_ms(),
        }
        room.chat_history.append(msg)
        limit = self.settings.CHAT_HISTORY_LIMIT
        if len(room.chat_history) > limit:
            room.chat_history = room.chat_history[-limit:]
        self.bus.publish(room.id, ev.NEW_MESSAGE, msg)
        return msg

    # ---- internal transitions ----

    def next_turn(self, room: Room) -> None:
        self._cancel_timer(room)
        if room.status != "playing":
            return
        if len(room.turns) < self.settings.MIN_PLAYERS:
            self.end_game(room)
            return

        if room.turns.advance():
            winner = round_winner(room)
            self.bus.publish(room.id, ev.ROUND_WINNER, winner)
            logger.info(
                f"[round-winner] room={room.id} round={room.current_round} "
                f"winner={winner['playerName']} score={winner['score']}"
            )
            room.turns.round += 1
            if room.turns.round > room.max_rounds:
                self.end_game(room)
                return
            room.turns.reshuffle([p.id for p in room.players])
            room.round_scores = {p.id: 0 for p in room.players}

        self._reset_turn(room)
        self._announce_turn(room)
        self.bus.publish(room.id, ev.ROOM_UPDATED, room_public_state(room))

    def end_game(self, room: Room) -> list[dict]:
        self._cancel_timer(room)
        if room.status == "finished":
            return room.leaderboard
        room.status = "finished"
        room.phase = None
        room.leaderboard = build_leaderboard(room)
        logger.info(
            f"[game-end] room={room.id} leaderboard="
            f"{[(e['name'], e['score']) for e in room.leaderboard]}"
        )
        self.bus.publish(room.id, ev.GAME_ENDED, {"leaderboard": room.leaderboard})
        return room.leaderboard

    def handle_departure(self, room: Room, player_id: str) -> None:
        """Recover after ``player_id`` was removed from ``room.players``."""
        held_turn = room.turns.remove(player_id, active=room.status == "playing")
        room.round_scores.pop(player_id, None)
        room.correct_guesses = [g for g in room.correct_guesses if g.player_id != player_id]
        if room.timer is not None and not held_turn:
            # The pointer may have shifted under the pending timer; same turn, new slot.
            room.timer.key = self._timer_key(room)

        if room.status != "playing":
            return
        if len(room.turns) < self.settings.MIN_PLAYERS:
            self.end_game(room)
            return
        if held_turn:
            logger.info(f"[turn-abandon] room={room.id} setter={player_id} left mid-turn")
            self.next_turn(room)
            return
        if room.phase == "guessing" and room.correct_guesses and self._everyone_guessed(room):
            self._settle_all_guessed(room)

    def destroy(self, room: Room) -> None:
        self._cancel_timer(room)
        room.destroyed = True
        room.phase = None

    # ---- helpers ----

    def _member(self, room: Room, player_id: str) -> Player:
        player = room.get_player(player_id)
        if player is None:
            raise NotInRoom()
        return player

    def _award(self, room: Room, player: Player, points: int) -> None:
        player.score += points
        room.round_scores[player.id] = room.round_scores.get(player.id, 0) + points

    def _everyone_guessed(self, room: Room) -> bool:
        return len(room.correct_guesses) >= len(room.players) - 1

    def _reset_turn(self, room: Room) -> None:
        room.phase = "awaiting_word"
        room.current_word = ""
        room.scrambled_word = ""
        room.hint = ""
        room.round_started_at_ms = None
        room.correct_guesses = []

    def _announce_turn(self, room: Room) -> None:
        logger.info(
            f"[turn] room={room.id} round={room.current_round} "
            f"index={room.turns.index} setter={room.setter_id}"
        )
        for recipient, event, payload in new_round_notices(room):
            self.bus.send(recipient, event, payload)

    def _settle_all_guessed(self, room: Room) -> None:
        setter_id = room.setter_id
        setter = room.get_player(setter_id) if setter_id else None
        bonus = scoring.completion_bonus(len(room.current_word))
        if setter is not None:
            self._award(room, setter, bonus)
        self._cancel_timer(room)
        room.phase = "settling"
        self.bus.publish(room.id, ev.ALL_GUESSED, {"wordSetterId": setter_id, "score": bonus})
        self._arm(room, self.settings.ALL_GUESSED_SETTLE_SEC, self.next_turn)

    def _on_guess_timeout(self, room: Room) -> None:
        setter_id = room.setter_id
        if not room.correct_guesses:
            setter = room.get_player(setter_id) if setter_id else None
            if setter is not None:
                self._award(room, setter, scoring.NO_GUESS_BONUS)
            self.bus.publish(
                room.id, ev.NO_GUESSES, {"wordSetterId": setter_id, "score": scoring.NO_GUESS_BONUS}
            )
        room.phase = "settling"
        self.bus.publish(
            room.id, ev.ROUND_ENDED, {"word": room.current_word, "scrambledWord": room.scrambled_word}
        )
        self.bus.publish(room.id, ev.ROOM_UPDATED, room_public_state(room))
        self._arm(room, self.settings.ROUND_ENDED_SETTLE_SEC, self.next_turn)

    def _timer_key(self, room: Room) -> TimerKey:
        return TimerKey(room.id, room.current_round, room.turns.index, room.phase or "")

    def _arm(self, room: Room, delay: float, action: Callable[[Room], None]) -> None:
        self._cancel_timer(room)
        key = self._timer_key(room)

        def _fire(handle: TimerHandle) -> None:
            with self.lock:
                if (
                    room.destroyed
                    or room.timer is not handle
                    or room.status != "playing"
                    or handle.key != self._timer_key(room)
                ):
                    logger.info(f"[timer-skip] {handle.key} is stale")
                    return
                room.timer = None
                logger.info(f"[timer-fire] {handle.key}")
                action(room)

        room.timer = self.scheduler.call_later(delay, key, _fire)
        logger.info(f"[timer-set] {key} delay={delay}s")

    def _cancel_timer(self, room: Room) -> None:
        if room.timer is not None:
            room.timer.cancel()
            room.timer = None
