from __future__ import annotations

from flask import Blueprint, jsonify, request

from ..game.words import WORD_CATEGORIES, pick_words

bp = Blueprint("words", __name__)


@bp.get("/words")
def get_words():
    try:
        count = int(request.args.get("count", "3"))
    except ValueError:
        count = 3

    category = request.args.get("category", "").strip().lower() or None
    if category and category not in WORD_CATEGORIES:
        return jsonify({"error": "unknown_category", "categories": sorted(WORD_CATEGORIES)}), 400

    return jsonify({"words": pick_words(count=count, category=category)})
