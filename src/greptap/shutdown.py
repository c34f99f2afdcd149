"""Session teardown.

PUBLIC API:
  - ShutdownCoordinator: Cancel workers, signal the child, join, build report
  - build_report: Final stdout lines for a finished session
"""

import logging
import os
import signal

from .bus import EventBus
from .cancel import CancelToken
from .logs import DiagnosticLog
from .runner import ProcessRunner
from .state import SessionState
from .ticker import Ticker
from .types import ChildHandle

__all__ = ["ShutdownCoordinator", "build_report"]

logger = logging.getLogger(__name__)


def _send_signal(pid: int, sig: int = signal.SIGTERM) -> bool:
    """Send a signal to a specific process.

    Args:
        pid: Process ID
        sig: Signal number (default: SIGTERM)

    Returns:
        True if signal was sent successfully
    """
    try:
        os.kill(pid, sig)
        logger.info(f"Sent signal {signal.Signals(sig).name} to PID {pid}")
        return True
    except ProcessLookupError:
        logger.info(f"Process {pid} already gone")
        return False
    except PermissionError:
        logger.error(f"Permission denied to signal process {pid}")
        return False
    except OSError as e:
        logger.error(f"Failed to send signal to {pid}: {e}")
        return False


class ShutdownCoordinator:
    """Owns the cancel token and the child handle at the end of a session.

    Shutdown is cooperative: the token is cancelled, the child gets exactly
    one termination signal, and both workers are joined without a timeout.
    A child that ignores the signal and keeps its stdout open keeps the
    capture thread in its read, and shutdown() waits for it.
    """

    def __init__(
        self,
        token: CancelToken,
        bus: EventBus,
        runner: ProcessRunner,
        ticker: Ticker,
        child: ChildHandle | None = None,
        sig: int = signal.SIGTERM,
    ):
        """Initialize coordinator.

        Args:
            token: Session cancel token shared with both workers.
            bus: Event bus, closed so pending sends fail.
            runner: Capture worker.
            ticker: Redraw worker.
            child: Pid returned by ProcessRunner.start(), None if spawn failed.
            sig: Signal delivered to the child.
        """
        self.token = token
        self.bus = bus
        self.runner = runner
        self.ticker = ticker
        self.child = child
        self.sig = sig

    def shutdown(self) -> None:
        """Stop the session's background work. Blocks until both workers return."""
        logger.info("Shutting down")
        self.token.cancel()
        self.bus.close()

        if self.child is not None:
            _send_signal(self.child, self.sig)

        self.runner.join()
        self.ticker.join()
        logger.info("Background threads joined")


def build_report(state: SessionState, log: DiagnosticLog | None = None) -> list[str]:
    """Full unfiltered output in arrival order, then the diagnostic log."""
    lines = list(state.output_lines)
    if log is not None:
        lines.extend(log.dump())
    return lines
