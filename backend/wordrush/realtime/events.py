from __future__ import annotations

from typing import Any

from flask_socketio import SocketIO

# Client -> server
JOIN_ROOM = "join-room"
START_GAME = "start-game"
SUBMIT_WORD = "submit-word"
SUBMIT_GUESS = "submit-guess"
USE_HINT = "use-hint"
SEND_MESSAGE = "send-message"

# Server -> client
ERROR = "error"
JOINED_ROOM = "joined-room"
PLAYER_JOINED = "player-joined"
PLAYER_LEFT = "player-left"
ROOM_UPDATED = "room-updated"
GAME_STARTED = "game-started"
NEW_ROUND = "new-round"
YOUR_TURN = "your-turn"
WORD_SCRAMBLED = "word-scrambled"
CORRECT_GUESS = "correct-guess"
INCORRECT_GUESS = "incorrect-guess"
ALL_GUESSED = "all-guessed"
NO_GUESSES = "no-guesses"
ROUND_ENDED = "round-ended"
ROUND_WINNER = "round-winner"
HINT_USED = "hint-used"
ACHIEVEMENT_UNLOCKED = "achievement-unlocked"
NEW_MESSAGE = "new-message"
GAME_ENDED = "game-ended"


class SocketIOBus:
    """Room channels and direct messages over Flask-SocketIO.

    Room channels are Socket.IO rooms named by room id; direct messages go
    to the connection's own sid room.
    """

    def __init__(self, socketio: SocketIO, namespace: str = "/") -> None:
        self.socketio = socketio
        self.namespace = namespace

    def subscribe(self, connection_id: str, room_id: str) -> None:
        self.socketio.server.enter_room(connection_id, room_id, namespace=self.namespace)

    def publish(self, room_id: str, event: str, payload: Any, exclude: str | None = None) -> None:
        self.socketio.emit(event, payload, to=room_id, skip_sid=exclude, namespace=self.namespace)

    def send(self, connection_id: str, event: str, payload: Any = None) -> None:
        if payload is None:
            self.socketio.emit(event, to=connection_id, namespace=self.namespace)
        else:
            self.socketio.emit(event, payload, to=connection_id, namespace=self.namespace)
