"""Command spawning and stdout capture.

PUBLIC API:
  - ProcessRunner: Spawn the command and stream its stdout onto the bus
"""

import logging
import subprocess
import threading
from collections.abc import Iterator
from typing import IO

from .bus import EventBus
from .cancel import CancelToken
from .types import BusEvent, ChildHandle, ChildPid, Exit, Output

__all__ = ["ProcessRunner"]

logger = logging.getLogger(__name__)


def _decode_line(raw: bytes) -> str:
    """Strip the LF or CRLF terminator and decode, replacing invalid UTF-8."""
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw.decode("utf-8", errors="replace")


def _read_lines(stream: IO[bytes]) -> Iterator[str]:
    """Yield lines until end of stream. A read error ends the stream."""
    try:
        for raw in iter(stream.readline, b""):
            yield _decode_line(raw)
    except (OSError, ValueError) as e:
        logger.warning(f"Output stream read failed, truncating capture: {e}")


class ProcessRunner:
    """Spawn one command and forward its stdout to the event bus.

    The capture thread sends ChildPid first, one Output per stdout line in
    arrival order, and Exit last. Every send is preceded by a check of the
    cancel token; once cancelled the thread returns without draining the rest
    of the output and without waiting for the child. The child is never
    killed from here, signalling it is the shutdown coordinator's job.

    Attributes:
        argv: Command and its arguments.
        thread: Capture thread, None until start() spawned the command.
    """

    def __init__(self, argv: list[str], bus: EventBus, token: CancelToken):
        """Initialize runner.

        Args:
            argv: Command and arguments, argv[0] is looked up on PATH.
            bus: Channel to the consumer loop.
            token: Session cancel token, polled before each send.
        """
        self.argv = list(argv)
        self.bus = bus
        self.token = token
        self.thread: threading.Thread | None = None
        self._process: subprocess.Popen | None = None

    def start(self) -> ChildHandle | None:
        """Spawn the command and start the capture thread.

        Returns:
            The child's pid, or None if the spawn failed. On failure a
            synthetic Output with the reason and an Exit(-1) are sent instead.
        """
        try:
            self._process = subprocess.Popen(self.argv, stdout=subprocess.PIPE)
        except (OSError, ValueError) as e:
            logger.error(f"Error spawning command {self.argv[0]!r}: {e}")
            self.bus.send(Output(f"Error: {e}"))
            self.bus.send(Exit(-1))
            return None

        self.thread = threading.Thread(target=self._capture, name="greptap-capture", daemon=True)
        self.thread.start()
        return self._process.pid

    def join(self, timeout: float | None = None) -> None:
        """Join the capture thread. Without a timeout this can block forever."""
        if self.thread:
            self.thread.join(timeout)

    @property
    def alive(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def _send(self, event: BusEvent) -> bool:
        if self.token.is_cancelled:
            return False
        return self.bus.send(event)

    def _capture(self) -> None:
        process = self._process
        assert process is not None and process.stdout is not None

        logger.info(f"Command spawned with PID: {process.pid}")
        if not self._send(ChildPid(process.pid)):
            self._abandon(process)
            return

        for line in _read_lines(process.stdout):
            if not self._send(Output(line)):
                self._abandon(process)
                return

        logger.info("Command completed reading output")
        process.stdout.close()
        self._send(Exit(self._wait(process)))

    def _wait(self, process: subprocess.Popen) -> int:
        """Wait for termination; -1 when waiting fails or there is no exit code."""
        try:
            returncode = process.wait()
        except OSError as e:
            logger.error(f"Error waiting for command to finish: {e}")
            return -1

        if returncode < 0:
            logger.info(f"Command terminated by signal {-returncode}")
            return -1

        logger.info(f"Command exited with code: {returncode}")
        return returncode

    def _abandon(self, process: subprocess.Popen) -> None:
        """Stop forwarding. Reap the child only if it has already gone.

        The read end is closed so a child that keeps writing gets EPIPE
        instead of blocking on a full pipe.
        """
        process.stdout.close()
        if process.poll() is None:
            logger.info(f"Stopped forwarding output, PID {process.pid} left to the shutdown signal")
        else:
            logger.info(f"Stopped forwarding output, PID {process.pid} exited with {process.returncode}")
