"""In-memory diagnostic log for the session.

The terminal belongs to the UI while a session runs, so log records are kept
in memory and printed after the UI has been torn down.

PUBLIC API:
  - DiagnosticLog: Logging handler collecting formatted records
  - install_log: Attach a DiagnosticLog to the greptap logger
"""

import logging
import threading

__all__ = ["DiagnosticLog", "install_log"]

LOG_HEADER = "--- DEV LOGS ---"
LOG_FOOTER = "----------------"


class DiagnosticLog(logging.Handler):
    """Append-only sink for log records from any thread.

    emit() already runs under the handler lock; the separate list lock lets
    readers take a consistent copy while workers keep logging.
    """

    def __init__(self, level: int = logging.DEBUG):
        super().__init__(level)
        self._lines: list[str] = []
        self._lines_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        msg = f"[{record.levelname}] {record.name}: {record.getMessage()}"
        with self._lines_lock:
            self._lines.append(msg)

    @property
    def lines(self) -> list[str]:
        """Copy of the collected lines."""
        with self._lines_lock:
            return list(self._lines)

    def dump(self) -> list[str]:
        """Collected lines framed for the final report."""
        return ["", LOG_HEADER, *self.lines, LOG_FOOTER]


def install_log(level: int | str = logging.INFO) -> DiagnosticLog:
    """Route greptap logging into a fresh DiagnosticLog.

    Args:
        level: Minimum level recorded.

    Returns:
        The installed handler.
    """
    handler = DiagnosticLog()
    handler.setLevel(level)

    greptap_logger = logging.getLogger("greptap")
    greptap_logger.setLevel(level)
    greptap_logger.addHandler(handler)
    # Keep records off the root handlers, they would write over the UI
    greptap_logger.propagate = False
    return handler
