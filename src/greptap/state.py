"""Session state - the one model the consumer loop mutates.

PUBLIC API:
  - SessionState: Output index, selection, run state, focus and query editor
  - QueryEditor: Query text with an edit cursor
  - Transition: Target panel of a focus move plus its side effects
  - FOCUS_TRANSITIONS: Focus table keyed by (panel, direction)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from .search import SearchIndex
from .selection import LEAD_PADDING, SelectionController
from .types import BusEvent, ChildHandle, ChildPid, Direction, Exit, Output, Panel, PreviewWindow, RunState, Tick

__all__ = ["SessionState", "QueryEditor", "Transition", "Effect", "FOCUS_TRANSITIONS"]

logger = logging.getLogger(__name__)


class Effect(Enum):
    """Side effects a focus transition carries out."""

    CURSOR_TO_END = "cursor_to_end"


@dataclass(frozen=True)
class Transition:
    target: Panel
    effects: tuple[Effect, ...] = ()


# Entering the query panel from elsewhere always puts the cursor at the end
FOCUS_TRANSITIONS: dict[tuple[Panel, Direction], Transition] = {
    (Panel.QUERY, Direction.FORWARD): Transition(Panel.RESULTS),
    (Panel.RESULTS, Direction.FORWARD): Transition(Panel.PREVIEW),
    (Panel.PREVIEW, Direction.FORWARD): Transition(Panel.QUERY, (Effect.CURSOR_TO_END,)),
    (Panel.QUERY, Direction.BACKWARD): Transition(Panel.PREVIEW),
    (Panel.RESULTS, Direction.BACKWARD): Transition(Panel.QUERY, (Effect.CURSOR_TO_END,)),
    (Panel.PREVIEW, Direction.BACKWARD): Transition(Panel.RESULTS),
}


@dataclass
class QueryEditor:
    """Query text and cursor position (character offset).

    Text-changing methods return True so the caller knows to re-filter.
    """

    text: str = ""
    cursor: int = 0

    def insert(self, char: str) -> bool:
        self.text = self.text[: self.cursor] + char + self.text[self.cursor :]
        self.cursor += len(char)
        return True

    def backspace(self) -> bool:
        if self.cursor == 0:
            return False
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1
        return True

    def delete(self) -> bool:
        if self.cursor >= len(self.text):
            return False
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]
        return True

    def left(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def right(self) -> None:
        if self.cursor < len(self.text):
            self.cursor += 1

    def home(self) -> None:
        self.cursor = 0

    def end(self) -> None:
        self.cursor = len(self.text)


@dataclass
class SessionState:
    """All mutable state of one session.

    Only the consumer loop calls into this object: bus events through
    apply(), key presses through greptap.keys. The renderer reads it.

    Attributes:
        command_info: Command line shown in the UI.
        index: Output buffer and filtered view.
        selection: Result cursor and preview scroll.
        run_state: Running until the Exit event was consumed.
        child: Pid from the ChildPid event, set once.
        panel: Panel with input focus.
        editor: Query being edited.
        dirty: Set by anything that needs a redraw, cleared by the renderer.
    """

    command_info: str = ""
    lead_padding: int = LEAD_PADDING
    index: SearchIndex = field(default_factory=SearchIndex)
    selection: SelectionController = field(init=False)
    run_state: RunState = field(default_factory=RunState)
    child: ChildHandle | None = None
    panel: Panel = Panel.QUERY
    editor: QueryEditor = field(default_factory=QueryEditor)
    dirty: bool = True

    def __post_init__(self):
        self.selection = SelectionController(self.index, self.lead_padding)

    # Bus events

    def apply(self, event: BusEvent) -> None:
        """Apply one background event."""
        match event:
            case Output(line=line):
                self.add_output(line)
            case Exit(code=code):
                self.set_exit_code(code)
            case ChildPid(pid=pid):
                self.set_child(pid)
            case Tick():
                pass
            case _:
                raise TypeError(f"Unknown bus event: {event!r}")
        self.dirty = True

    def add_output(self, line: str) -> None:
        """Append a captured line. Accepted before and after Exit alike."""
        if self.index.append(line):
            self.selection.clamp()

    def set_exit_code(self, code: int) -> None:
        if not self.run_state.running:
            logger.warning(f"Ignoring second exit code {code}")
            return
        self.run_state = RunState.exited(code)

    def set_child(self, pid: ChildHandle) -> None:
        if self.child is not None:
            logger.warning(f"Ignoring second child pid {pid}")
            return
        self.child = pid

    # Query and selection

    def set_query(self, query: str) -> None:
        """Replace the query, rebuild the view and select its first entry."""
        self.index.set_query(query)
        self.selection.reset()
        self.dirty = True

    def apply_editor(self) -> None:
        self.set_query(self.editor.text)

    def commit_query(self) -> None:
        """Apply the edited query and hand focus to the result list."""
        self.apply_editor()
        self.panel = Panel.RESULTS

    def select_next(self) -> None:
        self.selection.next()
        self.dirty = True

    def select_prev(self) -> None:
        self.selection.prev()
        self.dirty = True

    def visible_window(self, height: int) -> PreviewWindow:
        return self.selection.visible_window(height)

    # Focus

    def move_focus(self, direction: Direction) -> Panel:
        """Move focus per FOCUS_TRANSITIONS and run the transition's effects."""
        transition = FOCUS_TRANSITIONS[(self.panel, direction)]
        for effect in transition.effects:
            if effect is Effect.CURSOR_TO_END:
                self.editor.end()
        self.panel = transition.target
        self.dirty = True
        return self.panel

    def next_panel(self) -> Panel:
        return self.move_focus(Direction.FORWARD)

    def prev_panel(self) -> Panel:
        return self.move_focus(Direction.BACKWARD)

    # Read-only views for the renderer

    @property
    def exit_message(self) -> str | None:
        if self.run_state.running:
            return None
        return f"[Command exited with code: {self.run_state.exit_code}]"

    @property
    def output_lines(self) -> list[str]:
        return self.index.lines
