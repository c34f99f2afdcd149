"""Result cursor and preview scroll over a SearchIndex view.

PUBLIC API:
  - SelectionController: Cyclic selection, lead-padded scroll, preview window
  - LEAD_PADDING: Context lines kept above the selected line
"""

from .search import SearchIndex
from .types import PreviewLine, PreviewWindow

__all__ = ["SelectionController", "LEAD_PADDING"]

LEAD_PADDING = 3


class SelectionController:
    """Selected entry of the filtered view and the preview scroll derived from it.

    selection is a position in the view, None while the view is empty.
    preview_scroll is a buffer index: the top row of the context preview,
    kept at lead_padding rows above the selected line.

    Example:
        >>> index = SearchIndex()
        >>> for line in ["a", "b", "c", "apple"]:
        ...     index.append(line)
        >>> index.set_query("a")
        >>> selection = SelectionController(index)
        >>> selection.reset()
        >>> selection.next()
        >>> selection.selected_index, selection.preview_scroll
        (3, 0)
    """

    def __init__(self, index: SearchIndex, lead_padding: int = LEAD_PADDING):
        self.index = index
        self.lead_padding = lead_padding
        self.selection: int | None = None
        self.preview_scroll = 0

    @property
    def selected_index(self) -> int | None:
        """Buffer index of the selected entry."""
        if self.selection is None:
            return None
        return self.index.underlying_index(self.selection)

    def next(self) -> None:
        length = self.index.view_length
        if not length or self.selection is None:
            return
        self.selection = (self.selection + 1) % length
        self._update_scroll()

    def prev(self) -> None:
        length = self.index.view_length
        if not length or self.selection is None:
            return
        self.selection = self.selection - 1 if self.selection > 0 else length - 1
        self._update_scroll()

    def reset(self) -> None:
        """Select the first entry (or nothing) after the view was rebuilt."""
        self.selection = 0 if self.index.view_length else None
        self._update_scroll()

    def clamp(self) -> None:
        """Restore the selection invariant after the view changed.

        Keeps the current entry when it is still in range; selects the first
        entry when the view just became non-empty or shrank under the cursor.
        """
        length = self.index.view_length
        if not length:
            self.selection = None
        elif self.selection is None or self.selection >= length:
            self.selection = 0
        self._update_scroll()

    def visible_window(self, height: int) -> PreviewWindow:
        """Buffer slice shown in the preview, starting at preview_scroll.

        Args:
            height: Number of rows available.

        Returns:
            PreviewWindow with up to height rows and the selected row's
            position in it. Empty while nothing is selected.
        """
        selected = self.selected_index
        if selected is None or height <= 0:
            return PreviewWindow()

        lines = self.index.lines
        start = self.preview_scroll
        end = min(start + height, len(lines))
        rows = tuple(PreviewLine(number=i + 1, text=lines[i], selected=i == selected) for i in range(start, end))
        position = selected - start if start <= selected < end else None
        return PreviewWindow(lines=rows, selected_position=position)

    def _update_scroll(self) -> None:
        selected = self.selected_index
        if selected is None:
            return
        self.preview_scroll = max(0, selected - self.lead_padding)
