"""Session wiring - one command, one interactive session, one report.

PUBLIC API:
  - Session: Workers, state and coordinator for one command
  - run_session: Run a command through the interactive session
"""

import logging
import shlex

from .bus import EventBus
from .cancel import CancelToken
from .config import Settings
from .logs import DiagnosticLog
from .runner import ProcessRunner
from .shutdown import ShutdownCoordinator, build_report
from .state import SessionState
from .ticker import Ticker

__all__ = ["Session", "run_session"]

logger = logging.getLogger(__name__)


class Session:
    """Everything one run owns, created empty at start.

    start() spawns the command and the ticker; stop() hands over to the
    shutdown coordinator. In between, the caller drives the consumer loop
    over state and bus.
    """

    def __init__(self, argv: list[str], settings: Settings):
        self.argv = list(argv)
        self.settings = settings
        self.bus = EventBus()
        self.token = CancelToken()
        self.state = SessionState(command_info=shlex.join(self.argv), lead_padding=settings.lead_padding)
        self.runner = ProcessRunner(self.argv, self.bus, self.token)
        self.ticker = Ticker(self.bus, self.token, settings.tick_interval)
        self.coordinator: ShutdownCoordinator | None = None

    def start(self) -> None:
        child = self.runner.start()
        self.ticker.start()
        self.coordinator = ShutdownCoordinator(
            self.token,
            self.bus,
            self.runner,
            self.ticker,
            child=child,
            sig=self.settings.shutdown_signal,
        )

    def stop(self) -> None:
        if self.coordinator is not None:
            self.coordinator.shutdown()


def run_session(argv: list[str], settings: Settings, log: DiagnosticLog | None = None) -> list[str]:
    """Run argv under the interactive session until the operator quits.

    Args:
        argv: Command and its arguments.
        settings: Session settings.
        log: Diagnostic log appended to the report.

    Returns:
        Report lines: the whole capture, then the diagnostic log.
    """
    from .ui import GreptapApp

    session = Session(argv, settings)
    logger.info(f"Starting session for: {session.state.command_info}")
    session.start()
    try:
        GreptapApp(session.state, session.bus, settings).run()
    finally:
        session.stop()
    return build_report(session.state, log)
