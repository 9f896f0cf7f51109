# Production entry point, e.g. `gunicorn -k eventlet -w 1 wsgi:app`.
# Rooms live in process memory, so run a single worker.
import os
import sys

if sys.version_info < (3, 13) and os.environ.get("SOCKETIO_ASYNC_MODE", "") in ("", "eventlet"):
    import eventlet

    eventlet.monkey_patch()

try:
    from backend.wordrush.server import create_app
except ImportError:  # pragma: no cover
    from wordrush.server import create_app

app, socketio = create_app()
