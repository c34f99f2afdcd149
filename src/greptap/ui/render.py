"""Pure rendering helpers - session state in, rich Text out.

Kept free of Textual so the widgets stay thin and the formatting is testable.

PUBLIC API:
  - render_query: Query line with edit cursor
  - render_results: Window of the filtered list around the selection
  - render_preview: Context window with the selected line and matches marked
  - highlight_matches: Apply match spans to a line
  - results_title: Title of the result panel
  - preview_title: Title of the preview panel
"""

from rich.text import Text

from ..state import QueryEditor, SessionState

__all__ = [
    "render_query",
    "render_results",
    "render_preview",
    "highlight_matches",
    "results_title",
    "preview_title",
    "EMPTY_PREVIEW",
]

HIGHLIGHT = "bold yellow"
SELECTED = "bold yellow on grey23"
CURSOR = "reverse"
EMPTY_PREVIEW = "Enter a search pattern in the input box"


def format_line(number: int, line: str) -> str:
    """Line with its 1-based number, as shown in the result list."""
    return f"{number:5} | {line}"


def render_query(editor: QueryEditor, focused: bool) -> Text:
    """Prompt and query. A focused editor shows a block cursor."""
    text = Text("> ")
    if not focused:
        text.append(editor.text)
        return text

    before = editor.text[: editor.cursor]
    after = editor.text[editor.cursor :]
    text.append(before, style=HIGHLIGHT)
    if after:
        text.append(after[0], style=CURSOR)
        text.append(after[1:], style=HIGHLIGHT)
    else:
        text.append("█", style=HIGHLIGHT)
    return text


def list_offset(selection: int | None, height: int) -> int:
    """First visible row of the result list, keeping the selection on screen."""
    if selection is None or height <= 0:
        return 0
    return max(0, selection - height + 1)


def render_results(state: SessionState, height: int, focused: bool) -> Text:
    """Filtered lines that fit in height rows, plus the exit message when done.

    The selected row is highlighted only while the result list has focus.
    """
    index = state.index
    selection = state.selection.selection
    start = list_offset(selection, height)
    end = min(start + height, index.view_length)

    rows = []
    for position in range(start, end):
        buffer_index = index.underlying_index(position)
        row = Text(format_line(buffer_index + 1, index.lines[buffer_index]))
        if focused and position == selection:
            row.stylize(SELECTED)
        rows.append(row)

    if state.exit_message:
        rows.append(Text(state.exit_message, style="dim"))

    return Text("\n").join(rows)


def highlight_matches(line: str, spans: list[tuple[int, int]], offset: int = 0, style: str = "") -> Text:
    """Line with every (start, end) span styled, shifted by offset characters."""
    text = Text(line, style=style)
    for start, end in spans:
        if end > start:
            text.stylize(HIGHLIGHT, start + offset, end + offset)
    return text


def render_preview(state: SessionState, height: int) -> Text:
    """Context window starting at the preview scroll offset.

    Rows are "> " for the selected line and "  " otherwise, then the line
    number and the line with matches highlighted.
    """
    if not state.index.query:
        return Text(EMPTY_PREVIEW, justify="center")

    window = state.visible_window(height)
    rows = []
    for entry in window.lines:
        prefix = "> " if entry.selected else "  "
        numbered = format_line(entry.number, "")
        row = highlight_matches(
            f"{prefix}{numbered}{entry.text}",
            state.index.find_match_spans(entry.text),
            offset=len(prefix) + len(numbered),
            style=SELECTED if entry.selected else "",
        )
        rows.append(row)
    return Text("\n").join(rows)


def results_title(state: SessionState) -> str:
    return "Filtered Results" if state.index.query else "All Output"


def preview_title(state: SessionState) -> str:
    selected = state.selection.selected_index
    if selected is None:
        return "Preview"
    return f"Preview (line {selected + 1})"
