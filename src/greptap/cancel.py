"""Per-session cooperative cancellation.

PUBLIC API:
  - CancelToken: Thread-safe flag polled by the capture thread and ticker
"""

import threading

__all__ = ["CancelToken"]


class CancelToken:
    """Thread-safe cancellation token for the background workers.

    One token is created per session and passed to each worker when it is
    started. Only the shutdown coordinator cancels it. Workers poll
    ``is_cancelled`` at their send points, or block in ``wait()`` so that
    cancelling wakes them early.

    Example:
        token = CancelToken()

        # In worker thread
        while not token.is_cancelled:
            do_work_chunk()

        # In main thread
        token.cancel()
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        """True once cancel() has been called."""
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or the timeout expires.

        Args:
            timeout: Maximum seconds to wait. None waits forever.

        Returns:
            True if cancelled, False if the timeout expired.
        """
        return self._event.wait(timeout=timeout)
