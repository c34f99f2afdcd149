"""Textual widgets for the greptap session.

PUBLIC API:
  - QueryBar: Query line with edit cursor
  - ResultList: Filtered output list
  - PreviewPane: Context preview around the selected line
"""

from textual.widgets import Static

from ..state import SessionState
from ..types import Panel
from . import render

__all__ = ["QueryBar", "ResultList", "PreviewPane"]


class _SessionPanel(Static):
    """Static panel redrawn from the session state.

    Widgets take no input focus; keys are dispatched by the app. The
    -active class marks the panel that has focus in the session.
    """

    PANEL: Panel

    def show(self, state: SessionState) -> None:
        self.set_class(state.panel is self.PANEL, "-active")
        self.update(self.build(state, self.content_size.height))

    def build(self, state: SessionState, height: int):
        raise NotImplementedError


class QueryBar(_SessionPanel):
    PANEL = Panel.QUERY

    def build(self, state: SessionState, height: int):
        self.border_subtitle = state.command_info
        return render.render_query(state.editor, focused=state.panel is Panel.QUERY)


class ResultList(_SessionPanel):
    PANEL = Panel.RESULTS

    def build(self, state: SessionState, height: int):
        self.border_title = render.results_title(state)
        # One row is kept for the exit message
        rows = height - 1 if state.exit_message else height
        return render.render_results(state, rows, focused=state.panel is Panel.RESULTS)


class PreviewPane(_SessionPanel):
    """Scrollable preview of the output around the selected line."""

    PANEL = Panel.PREVIEW

    def build(self, state: SessionState, height: int):
        self.border_title = render.preview_title(state)
        return render.render_preview(state, height)
