"""Periodic redraw trigger.

PUBLIC API:
  - Ticker: Background thread sending Tick events at a fixed interval
"""

import logging
import threading

from .bus import EventBus
from .cancel import CancelToken
from .types import Tick

__all__ = ["Ticker", "TICK_INTERVAL"]

logger = logging.getLogger(__name__)

TICK_INTERVAL = 0.25


class Ticker:
    """Send a Tick every interval until cancelled or the bus is closed."""

    def __init__(self, bus: EventBus, token: CancelToken, interval: float = TICK_INTERVAL):
        self.bus = bus
        self.token = token
        self.interval = interval
        self.thread: threading.Thread | None = None

    def start(self) -> None:
        self.thread = threading.Thread(target=self._run, name="greptap-ticker", daemon=True)
        self.thread.start()

    def join(self, timeout: float | None = None) -> None:
        if self.thread:
            self.thread.join(timeout)

    @property
    def alive(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def _run(self) -> None:
        while not self.token.is_cancelled:
            if not self.bus.send(Tick()):
                break
            # Sleeps on the token so cancel() wakes the ticker right away
            if self.token.wait(self.interval):
                break
        logger.debug("Ticker stopped")
