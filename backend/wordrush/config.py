import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")

    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Reverse proxy / IP headers
    TRUST_PROXY_HEADERS = os.environ.get("TRUST_PROXY_HEADERS", "1") == "1"

    # Socket.IO async mode; empty picks eventlet or threading per platform
    SOCKETIO_ASYNC_MODE = os.environ.get("SOCKETIO_ASYNC_MODE", "").strip()

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Rooms
    MIN_PLAYERS = int(os.environ.get("MIN_PLAYERS", "2"))
    MAX_PLAYERS = int(os.environ.get("MAX_PLAYERS", "8"))
    ROOM_ID_LENGTH = int(os.environ.get("ROOM_ID_LENGTH", "8"))
    DEFAULT_DIFFICULTY = os.environ.get("DEFAULT_DIFFICULTY", "medium")
    CHAT_HISTORY_LIMIT = int(os.environ.get("CHAT_HISTORY_LIMIT", "200"))
    MAX_NAME_LENGTH = int(os.environ.get("MAX_NAME_LENGTH", "16"))

    # Game
    MAX_ROUNDS = int(os.environ.get("MAX_ROUNDS", "5"))
    MIN_WORD_LENGTH = int(os.environ.get("MIN_WORD_LENGTH", "3"))
    ALL_GUESSED_SETTLE_SEC = float(os.environ.get("ALL_GUESSED_SETTLE_SEC", "2"))
    ROUND_ENDED_SETTLE_SEC = float(os.environ.get("ROUND_ENDED_SETTLE_SEC", "3"))
