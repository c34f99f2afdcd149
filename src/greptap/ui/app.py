"""Textual application for a greptap session.

PUBLIC API:
  - GreptapApp: Consumer loop and renderer for one session
"""

import logging

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal

from ..bus import EventBus
from ..config import Settings
from ..keys import handle_key
from ..loop import pump
from ..state import SessionState
from .widgets import PreviewPane, QueryBar, ResultList

__all__ = ["GreptapApp"]

logger = logging.getLogger(__name__)


class GreptapApp(App):
    """Single consumer of the event bus.

    Everything here runs on the app's event loop thread: the poll timer pumps
    background events into the state, key handlers edit it, and the panels are
    redrawn from it. The app never exits on its own when the command
    finishes; only a quit key ends it.
    """

    TITLE = "greptap"
    CSS = """
    QueryBar {
        height: 3;
        border: round $secondary;
        padding: 0 1;
    }

    #panels {
        height: 1fr;
    }

    ResultList, PreviewPane {
        width: 1fr;
        height: 1fr;
        border: round $secondary;
    }

    QueryBar.-active, ResultList.-active, PreviewPane.-active {
        border: round $warning;
    }
    """

    # Priority so Textual's own focus and quit handling never sees these keys
    BINDINGS = [
        Binding("ctrl+c", "session_key('ctrl+c')", "Quit", priority=True),
        Binding("ctrl+q", "session_key('ctrl+q')", "Quit", show=False, priority=True),
        Binding("tab", "session_key('tab')", "Next panel", show=False, priority=True),
        Binding("shift+tab", "session_key('shift+tab')", "Previous panel", show=False, priority=True),
    ]

    def __init__(self, state: SessionState, bus: EventBus, settings: Settings):
        super().__init__()
        self.state = state
        self.bus = bus
        self.settings = settings

    def compose(self) -> ComposeResult:
        yield QueryBar("", id="query")
        with Horizontal(id="panels"):
            yield ResultList("", id="results")
            yield PreviewPane("", id="preview")

    def on_mount(self) -> None:
        self.set_interval(self.settings.poll_interval, self._poll)
        self._redraw()

    def on_resize(self, event: events.Resize) -> None:
        self.state.dirty = True

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self._dispatch(event.key, event.character)

    def action_session_key(self, key: str) -> None:
        self._dispatch(key, None)

    def _dispatch(self, key: str, character: str | None) -> None:
        if handle_key(self.state, key, character):
            logger.info("Quit requested")
            self.exit()
            return
        self._redraw()

    def _poll(self) -> None:
        """One consumer iteration: pump background events, redraw if needed."""
        pump(self.state, self.bus, self.settings.drain)
        self._redraw()

    def _redraw(self) -> None:
        if not self.state.dirty:
            return
        self.state.dirty = False
        for panel in (self.query_one(QueryBar), self.query_one(ResultList), self.query_one(PreviewPane)):
            panel.show(self.state)
