from __future__ import annotations

import logging
import uuid
from threading import RLock
from urllib.parse import quote

from ..config import Config
from ..realtime import events as ev
from .engine import GameEngine
from .errors import InvalidConfig, InvalidName, InvalidState, NameTaken, RoomFull, RoomNotFound
from .models import Player, Room, room_public_state, room_summary

logger = logging.getLogger(__name__)


def _valid_name(name: str, max_length: int) -> bool:
    if not name or len(name) > max_length:
        return False
    # No markup or control characters in display names.
    return not any(ch in "<>" or ord(ch) < 32 for ch in name)


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def avatar_url(name: str) -> str:
    return f"https://api.dicebear.com/7.x/avataaars/svg?seed={quote(name)}"


class RoomRegistry:
    """Process-wide room and connection bookkeeping.

    Maps room id -> Room and connection id -> room id. Built once by the app
    factory and handed to the HTTP routes and socket handlers; every
    mutation runs under a single lock shared with the engine's timers.
    """

    def __init__(self, bus, scheduler, settings=Config) -> None:
        self._lock = RLock()
        self._rooms: dict[str, Room] = {}
        self._connections: dict[str, str] = {}
        self.settings = settings
        self.bus = bus
        self.engine = GameEngine(bus, scheduler, lock=self._lock, settings=settings)

    # ---- rooms ----

    def _new_room_id(self) -> str:
        length = self.settings.ROOM_ID_LENGTH
        code = uuid.uuid4().hex[:length].upper()
        while code in self._rooms:
            code = uuid.uuid4().hex[:length].upper()
        return code

    def create_room(
        self,
        name: str = "",
        is_public=True,
        time_per_round=60,
        max_players=8,
        difficulty: str | None = None,
    ) -> Room:
        lo, hi = self.settings.MIN_PLAYERS, self.settings.MAX_PLAYERS
        try:
            max_players = int(max_players)
        except (TypeError, ValueError):
            raise InvalidConfig(f"Maximum players must be between {lo} and {hi}")
        if not lo <= max_players <= hi:
            raise InvalidConfig(f"Maximum players must be between {lo} and {hi}")
        try:
            time_per_round = int(time_per_round)
        except (TypeError, ValueError):
            raise InvalidConfig("Time per round must be a whole number of seconds")
        if time_per_round <= 0:
            raise InvalidConfig("Time per round must be positive")

        with self._lock:
            room_id = self._new_room_id()
            room = Room(
                id=room_id,
                name=str(name or "").strip() or f"Room {room_id}",
                is_public=_as_bool(is_public),
                time_per_round=time_per_round,
                max_players=max_players,
                difficulty=str(difficulty or "").strip() or self.settings.DEFAULT_DIFFICULTY,
                max_rounds=self.settings.MAX_ROUNDS,
            )
            self._rooms[room_id] = room
            logger.info(f"[room-create] room={room_id} name={room.name!r} max_players={max_players}")
            return room

    def get_room(self, room_id: str) -> Room | None:
        with self._lock:
            return self._rooms.get(str(room_id or "").strip().upper())

    def require_room(self, room_id: str) -> Room:
        room = self.get_room(room_id)
        if room is None:
            raise RoomNotFound()
        return room

    def snapshot(self, room_id: str) -> dict:
        with self._lock:
            return room_public_state(self.require_room(room_id))

    def list_public_waiting_rooms(self) -> list[dict]:
        with self._lock:
            return [
                room_summary(r)
                for r in self._rooms.values()
                if r.is_public and r.status == "waiting"
            ]

    def _destroy(self, room: Room) -> None:
        self.engine.destroy(room)
        self._rooms.pop(room.id, None)
        logger.info(f"[room-delete] room={room.id} (no players left)")

    # ---- connections ----

    def attach_player(self, room_id: str, connection_id: str, name) -> Player:
        name = str(name or "").strip()
        if not _valid_name(name, self.settings.MAX_NAME_LENGTH):
            raise InvalidName()

        with self._lock:
            room = self.require_room(room_id)
            if connection_id in self._connections:
                raise InvalidState("Already in a room")
            if len(room.players) >= room.max_players:
                raise RoomFull()
            if any(p.name == name for p in room.players):
                raise NameTaken()

            player = Player(
                id=connection_id,
                name=name,
                is_host=not room.players,
                avatar=avatar_url(name),
            )
            room.players.append(player)
            room.round_scores[player.id] = 0
            # Mid-game joiners wait for the next round's reshuffle.
            if room.status != "playing":
                room.turns.append(player.id)
            self._connections[connection_id] = room.id
            logger.info(f"[join] room={room.id} player={name!r} turn_order={room.turns.order}")

            state = room_public_state(room)
            self.bus.subscribe(connection_id, room.id)
            self.bus.send(
                connection_id,
                ev.JOINED_ROOM,
                {"room": state, "player": player.to_dict(), "messages": list(room.chat_history)},
            )
            self.bus.publish(room.id, ev.PLAYER_JOINED, player.to_dict(), exclude=connection_id)
            self.bus.publish(room.id, ev.ROOM_UPDATED, state)
            return player

    def detach_player(self, connection_id: str) -> Player | None:
        """Remove a connection's player; safe to call more than once."""
        with self._lock:
            room_id = self._connections.pop(connection_id, None)
            room = self._rooms.get(room_id) if room_id else None
            if room is None:
                return None
            player = room.get_player(connection_id)
            if player is None:
                return None

            room.players.remove(player)
            if not room.players:
                self._destroy(room)
                return player

            if player.is_host:
                player.is_host = False
                room.players[0].is_host = True
                logger.info(f"[host] room={room.id} new_host={room.players[0].name!r}")

            self.engine.handle_departure(room, connection_id)
            logger.info(f"[leave] room={room.id} player={player.name!r} turn_order={room.turns.order}")

            self.bus.publish(room.id, ev.PLAYER_LEFT, connection_id)
            self.bus.publish(room.id, ev.ROOM_UPDATED, room_public_state(room))
            return player

    # ---- session events ----

    def start_game(self, room_id: str, connection_id: str) -> None:
        with self._lock:
            self.engine.start_game(self.require_room(room_id), connection_id)

    def submit_word(self, room_id: str, connection_id: str, word) -> dict:
        with self._lock:
            return self.engine.submit_word(self.require_room(room_id), connection_id, word)

    def submit_guess(self, room_id: str, connection_id: str, guess) -> dict | None:
        with self._lock:
            return self.engine.submit_guess(self.require_room(room_id), connection_id, guess)

    def use_hint(self, room_id: str, connection_id: str) -> dict | None:
        with self._lock:
            return self.engine.use_hint(self.require_room(room_id), connection_id)

    def send_message(self, room_id: str, connection_id: str, message) -> dict:
        with self._lock:
            return self.engine.send_message(self.require_room(room_id), connection_id, message)
