import os
import sys

import pytest

# Ensure the backend root (containing the `wordrush` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from wordrush.config import Config  # noqa: E402
from wordrush.game.service import RoomRegistry  # noqa: E402
from wordrush.game.timers import TimerHandle  # noqa: E402
from wordrush.server import create_app  # noqa: E402


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SOCKETIO_ASYNC_MODE = "threading"
    TRUST_PROXY_HEADERS = False
    LOG_LEVEL = "WARNING"


class RecordingBus:
    """In-memory stand-in for the Socket.IO bus."""

    def __init__(self):
        self.subscriptions = []
        self.published = []
        self.sent = []

    def subscribe(self, connection_id, room_id):
        self.subscriptions.append((connection_id, room_id))

    def publish(self, room_id, event, payload, exclude=None):
        self.published.append((room_id, event, payload, exclude))

    def send(self, connection_id, event, payload=None):
        self.sent.append((connection_id, event, payload))

    def events(self, name):
        return [p for (_, e, p, _) in self.published if e == name]

    def direct(self, connection_id, name):
        return [p for (c, e, p) in self.sent if c == connection_id and e == name]

    def names(self):
        return [e for (_, e, _, _) in self.published]

    def clear(self):
        self.published.clear()
        self.sent.clear()


class ManualScheduler:
    """Timers that only fire when a test says so."""

    def __init__(self):
        self.scheduled = []

    def call_later(self, delay, key, callback):
        handle = TimerHandle(key, delay)
        self.scheduled.append((handle, callback))
        return handle

    @property
    def pending(self):
        return [h for h, _ in self.scheduled if h.pending]

    def fire_next(self):
        for handle, callback in self.scheduled:
            if handle.pending:
                handle.fired = True
                callback(handle)
                return handle
        raise AssertionError("no pending timer")

    def force(self, handle):
        """Invoke a callback regardless of its state, as a late worker would."""
        for h, callback in self.scheduled:
            if h is handle:
                callback(h)
                return
        raise AssertionError("unknown handle")


@pytest.fixture()
def bus():
    return RecordingBus()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def registry(bus, scheduler):
    return RoomRegistry(bus=bus, scheduler=scheduler, settings=TestConfig)


@pytest.fixture()
def make_room(registry):
    def _make(players=("alice", "bob", "cara"), **config):
        config.setdefault("name", "Test Room")
        config.setdefault("time_per_round", 30)
        config.setdefault("max_players", 8)
        room = registry.create_room(**config)
        for name in players:
            registry.attach_player(room.id, f"sid-{name}", name)
        return room

    return _make


@pytest.fixture()
def started_room(registry, make_room, bus):
    room = make_room()
    registry.start_game(room.id, "sid-alice")
    bus.clear()
    return room


@pytest.fixture()
def flask_app():
    app, socketio = create_app(TestConfig)
    app.config["SOCKETIO"] = socketio
    yield app


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def socketio(flask_app):
    return flask_app.config["SOCKETIO"]
