"""Development entry point: ``python backend/app.py``."""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger("wordrush")


def _wants_eventlet() -> bool:
    # eventlet does not support Windows or Python 3.13+.
    if sys.platform.startswith("win") or sys.version_info >= (3, 13):
        return False
    return os.environ.get("SOCKETIO_ASYNC_MODE", "").strip() in ("", "eventlet")


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip() == "1"


def main() -> None:
    load_dotenv(Path(__file__).resolve().parents[1] / ".env")

    # Must patch before Flask or socket imports.
    if _wants_eventlet():
        import eventlet

        eventlet.monkey_patch()

    try:
        from backend.wordrush.server import create_app
    except ImportError:  # pragma: no cover
        from wordrush.server import create_app

    app, socketio = create_app()

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "3001"))
    logger.info(f"[startup] WordRush listening on {host}:{port} async_mode={socketio.async_mode}")

    socketio.run(
        app,
        host=host,
        port=port,
        debug=_env_flag("FLASK_DEBUG", "0"),
        use_reloader=_env_flag("FLASK_USE_RELOADER", "0"),
        allow_unsafe_werkzeug=_env_flag("ALLOW_UNSAFE_WERKZEUG", "1"),
    )


if __name__ == "__main__":
    main()
