from __future__ import annotations

import logging
from functools import wraps

from flask import request
from flask_socketio import SocketIO, emit

from ..game.errors import GameError
from ..game.service import RoomRegistry
from . import events as ev

logger = logging.getLogger(__name__)


def _room_id(payload: dict) -> str:
    return str(payload.get("roomId", "")).strip()


def register_socketio_handlers(socketio: SocketIO, registry: RoomRegistry) -> None:
    def guarded(event: str):
        """Report rejections privately and keep faults from leaking out."""

        def decorator(fn):
            @wraps(fn)
            def wrapper(data=None):
                payload = data if isinstance(data, dict) else {}
                try:
                    result = fn(payload)
                except GameError as exc:
                    emit(ev.ERROR, exc.to_payload())
                    return {"ok": False, "error": exc.code}
                except Exception:
                    logger.exception(f"[handler-error] event={event} sid={request.sid}")
                    emit(ev.ERROR, {"error": "internal_error", "message": f"Failed to handle {event}"})
                    return {"ok": False, "error": "internal_error"}
                return {"ok": True, **(result or {})}

            socketio.on_event(event, wrapper)
            return wrapper

        return decorator

    @guarded(ev.JOIN_ROOM)
    def join_room(payload):
        player = registry.attach_player(_room_id(payload), request.sid, payload.get("playerName"))
        return {"player": player.to_dict()}

    @guarded(ev.START_GAME)
    def start_game(payload):
        registry.start_game(_room_id(payload), request.sid)

    @guarded(ev.SUBMIT_WORD)
    def submit_word(payload):
        registry.submit_word(_room_id(payload), request.sid, payload.get("word"))

    @guarded(ev.SUBMIT_GUESS)
    def submit_guess(payload):
        result = registry.submit_guess(_room_id(payload), request.sid, payload.get("guess"))
        if result is None:
            return None
        return {"correct": result["correct"]}

    @guarded(ev.USE_HINT)
    def use_hint(payload):
        registry.use_hint(_room_id(payload), request.sid)

    @guarded(ev.SEND_MESSAGE)
    def send_message(payload):
        registry.send_message(_room_id(payload), request.sid, payload.get("message", ""))

    @socketio.on("disconnect")
    def on_disconnect(*args):
        try:
            player = registry.detach_player(request.sid)
        except Exception:
            logger.exception(f"[handler-error] event=disconnect sid={request.sid}")
            return
        if player is not None:
            logger.info(f"[disconnect] sid={request.sid} player={player.name!r}")
