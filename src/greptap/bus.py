"""Ordered event channel between the workers and the consumer loop.

PUBLIC API:
  - EventBus: Multi-producer, single-consumer queue of bus events
"""

import logging
import queue
import threading

from .types import BusEvent

__all__ = ["EventBus"]

logger = logging.getLogger(__name__)


class EventBus:
    """Multi-producer, single-consumer channel.

    Events from one producer are received in send order. There is no ordering
    between producers. Closing the bus plays the part of the consumer going
    away: sends fail from then on, so producers can stop, while events that
    were already queued can still be received.
    """

    def __init__(self):
        self._queue: queue.SimpleQueue[BusEvent] = queue.SimpleQueue()
        self._closed = threading.Event()

    def send(self, event: BusEvent) -> bool:
        """Enqueue an event.

        Returns:
            False if the bus is closed and the event was dropped.
        """
        if self._closed.is_set():
            return False
        self._queue.put(event)
        return True

    def try_receive(self) -> BusEvent | None:
        """Receive one pending event without blocking."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def drain(self, limit: int | None = None) -> list[BusEvent]:
        """Receive pending events without blocking.

        Args:
            limit: Maximum number of events to take. None takes all pending.
        """
        events = []
        while limit is None or len(events) < limit:
            event = self.try_receive()
            if event is None:
                break
            events.append(event)
        return events

    def close(self) -> None:
        """Refuse further sends."""
        if not self._closed.is_set():
            logger.debug("Event bus closed")
        self._closed.set()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()
