# events.py
from __future__ import annotations

import logging
import queue
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class GameEvent(Enum):
    FOOD_EATEN = "food_eaten"
    SNAKE_DIED = "snake_died"
    DIRECTION_CHANGED = "direction_changed"


_CLOSED = object()


class EventChannel:
    """
    One-way, non-blocking pipe from the frame loop to a consumer thread.

    Instances are valid board observers: calling one enqueues the event.
    Sends never wait. If the queue is full or the channel was closed the
    event is dropped.
    """

    def __init__(self, maxsize: int = 8):
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=maxsize)
        self._closed = False
        self.dropped = 0

    def __call__(self, event: GameEvent) -> None:
        self.send(event)

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, event: GameEvent) -> bool:
        """Enqueue without blocking. Returns False if the event was dropped."""
        if self._closed:
            self.dropped += 1
            return False
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            self.dropped += 1
            logger.debug("event channel full, dropped %s", event.name)
            return False
        return True

    def get(self, timeout: Optional[float] = None) -> Optional[GameEvent]:
        """
        Receiver side. Returns the next event, or None once the channel is
        closed or the timeout expires.
        """
        try:
            item = self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
        if item is _CLOSED:
            return None
        return item  # type: ignore[return-value]

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        # Wake a blocked receiver; make room if needed.
        while True:
            try:
                self._queue.put_nowait(_CLOSED)
                return
            except queue.Full:
                try:
                    self._queue.get_nowait()
                except queue.Empty:
                    pass
