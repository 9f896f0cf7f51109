from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, jsonify

bp = Blueprint("health", __name__)


@bp.get("/health")
def health():
    return jsonify({"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()})
