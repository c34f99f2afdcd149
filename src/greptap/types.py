"""Type definitions for greptap - bus events, run state and panels.

Everything the capture thread and the ticker hand to the consumer is one of
the four event dataclasses below. They are frozen so a queued event can't be
changed after it was sent.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias


ChildHandle: TypeAlias = int  # pid of the spawned command


@dataclass(frozen=True)
class ChildPid:
    """Child process was spawned. Always precedes the first Output of a run."""

    pid: ChildHandle


@dataclass(frozen=True)
class Output:
    """One line of captured stdout, without its line terminator."""

    line: str


@dataclass(frozen=True)
class Tick:
    """Redraw trigger from the ticker."""


@dataclass(frozen=True)
class Exit:
    """Command terminated. Last event the runner emits for a run."""

    code: int


BusEvent: TypeAlias = ChildPid | Output | Tick | Exit


@dataclass(frozen=True)
class RunState:
    """Lifecycle of the wrapped command.

    Attributes:
        exit_code: None while running, the exit code once Exit was consumed.
    """

    exit_code: int | None = None

    @property
    def running(self) -> bool:
        return self.exit_code is None

    @classmethod
    def exited(cls, code: int) -> "RunState":
        return cls(exit_code=code)


class Panel(Enum):
    """Focusable panels, in forward tab order."""

    QUERY = "query"
    RESULTS = "results"
    PREVIEW = "preview"


class Direction(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class PreviewLine:
    """One row of the context preview.

    Attributes:
        number: 1-based line number in the output buffer.
        text: Raw captured line.
        selected: True for the line the result cursor points at.
    """

    number: int
    text: str
    selected: bool


@dataclass(frozen=True)
class PreviewWindow:
    """Visible slice of the output buffer around the selection.

    Attributes:
        lines: Rows from the scroll offset down, at most the window height.
        selected_position: Row of the selected line within lines, or None
            when the selected line is scrolled out of range.
    """

    lines: tuple[PreviewLine, ...] = ()
    selected_position: int | None = None


__all__ = [
    "ChildHandle",
    "ChildPid",
    "Output",
    "Tick",
    "Exit",
    "BusEvent",
    "RunState",
    "Panel",
    "Direction",
    "PreviewLine",
    "PreviewWindow",
]
