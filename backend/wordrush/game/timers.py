from __future__ import annotations

import logging
from collections.abc import Callable
from typing import NamedTuple

logger = logging.getLogger(__name__)


class TimerKey(NamedTuple):
    room_id: str
    round: int
    turn_index: int
    phase: str


class TimerHandle:
    """Single-shot, cancellable delayed call bound to one room turn."""

    def __init__(self, key: TimerKey, delay: float) -> None:
        self.key = key
        self.delay = delay
        self.cancelled = False
        self.fired = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "fired" if self.fired else "pending"
        return f"<TimerHandle {self.key} {self.delay}s {state}>"


class BackgroundScheduler:
    """Runs delayed callbacks as Socket.IO background tasks.

    The worker sleeps with ``socketio.sleep`` so it cooperates with
    eventlet as well as threading mode.
    """

    def __init__(self, socketio) -> None:
        self._socketio = socketio

    def call_later(
        self,
        delay: float,
        key: TimerKey,
        callback: Callable[[TimerHandle], None],
    ) -> TimerHandle:
        handle = TimerHandle(key, delay)

        def _worker() -> None:
            self._socketio.sleep(delay)
            if handle.cancelled:
                logger.debug(f"[timer-skip] {key} cancelled before firing")
                return
            handle.fired = True
            try:
                callback(handle)
            except Exception:
                logger.exception(f"[timer-error] {key}")

        self._socketio.start_background_task(_worker)
        return handle
