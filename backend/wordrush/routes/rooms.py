from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from ..game.errors import InvalidConfig, RoomNotFound
from ..game.models import room_public_state

bp = Blueprint("rooms", __name__)


def _registry():
    return current_app.extensions["room_registry"]


@bp.post("/create-room")
def create_room():
    data = request.get_json(silent=True) or {}
    try:
        room = _registry().create_room(
            name=data.get("roomName", ""),
            is_public=data.get("isPublic", True),
            time_per_round=data.get("timePerRound", 60),
            max_players=data.get("maxPlayers", 8),
            difficulty=data.get("difficulty"),
        )
    except InvalidConfig as exc:
        return jsonify(exc.to_payload()), 400
    return jsonify({"roomId": room.id, "room": room_public_state(room)})


@bp.get("/rooms")
def list_rooms():
    return jsonify(_registry().list_public_waiting_rooms())


@bp.get("/room/<room_id>")
def get_room(room_id: str):
    try:
        return jsonify(_registry().snapshot(room_id))
    except RoomNotFound as exc:
        return jsonify(exc.to_payload()), 404
