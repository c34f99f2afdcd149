"""Tests for SelectionController cycling, scroll rule and preview window."""

import pytest

from greptap.search import SearchIndex
from greptap.selection import SelectionController


def controller(lines: list[str], query: str = "") -> SelectionController:
    index = SearchIndex()
    for line in lines:
        index.append(line)
    index.set_query(query)
    selection = SelectionController(index)
    selection.reset()
    return selection


NUMBERED = [f"line {i}" for i in range(20)]


class TestCycling:
    def test_next_wraps_after_n_steps(self):
        selection = controller(NUMBERED, "line 1")
        n = selection.index.view_length
        start = selection.selection
        for _ in range(n):
            selection.next()
        assert selection.selection == start

    def test_prev_from_zero_goes_to_last(self):
        selection = controller(NUMBERED)
        assert selection.selection == 0
        selection.prev()
        assert selection.selection == len(NUMBERED) - 1

    def test_next_and_prev_are_noops_on_empty_view(self):
        selection = controller(NUMBERED, "nomatch")
        selection.next()
        selection.prev()
        assert selection.selection is None
        assert selection.selected_index is None

    def test_reset_on_empty_view_is_inactive(self):
        selection = controller([])
        assert selection.selection is None


class TestScrollRule:
    @pytest.mark.parametrize("target", [0, 1, 2, 3, 4, 10, 19])
    def test_scroll_keeps_three_lines_of_lead(self, target):
        selection = controller(NUMBERED)
        for _ in range(target):
            selection.next()
        assert selection.selected_index == target
        assert selection.preview_scroll == max(0, target - 3)

    def test_scroll_follows_underlying_index_not_view_position(self):
        selection = controller(NUMBERED, "line 1[5-9]")
        assert selection.selected_index == 15
        assert selection.preview_scroll == 12

    def test_custom_lead_padding(self):
        index = SearchIndex()
        for line in NUMBERED:
            index.append(line)
        selection = SelectionController(index, lead_padding=5)
        selection.reset()
        for _ in range(8):
            selection.next()
        assert selection.preview_scroll == 3


class TestClamp:
    def test_clamp_activates_first_entry(self):
        index = SearchIndex()
        selection = SelectionController(index)
        selection.clamp()
        assert selection.selection is None

        index.append("first")
        selection.clamp()
        assert selection.selection == 0

    def test_clamp_keeps_valid_selection(self):
        selection = controller(NUMBERED)
        selection.next()
        selection.next()
        selection.index.append("late line")
        selection.clamp()
        assert selection.selection == 2

    def test_clamp_resets_out_of_range_selection(self):
        selection = controller(NUMBERED)
        selection.prev()
        selection.index.set_query("line 0")
        selection.clamp()
        assert selection.selection == 0


class TestVisibleWindow:
    def test_window_slices_from_scroll(self):
        selection = controller(NUMBERED)
        for _ in range(10):
            selection.next()
        window = selection.visible_window(5)
        assert [line.number for line in window.lines] == [8, 9, 10, 11, 12]
        assert window.selected_position == 3
        assert [line.selected for line in window.lines] == [False, False, False, True, False]

    def test_window_truncates_at_buffer_end(self):
        selection = controller(NUMBERED)
        selection.prev()
        window = selection.visible_window(10)
        assert [line.number for line in window.lines] == [17, 18, 19, 20]
        assert window.selected_position == 3

    def test_selected_line_out_of_range(self):
        """A window shorter than the lead padding can't reach the selected line."""
        selection = controller(NUMBERED)
        for _ in range(10):
            selection.next()
        window = selection.visible_window(2)
        assert len(window.lines) == 2
        assert window.selected_position is None

    def test_empty_window_without_selection(self):
        selection = controller(NUMBERED, "nomatch")
        window = selection.visible_window(10)
        assert window.lines == ()
        assert window.selected_position is None

    def test_end_to_end_apple(self):
        """Query "a" over a/b/c/apple keeps the whole buffer in view."""
        selection = controller(["a", "b", "c", "apple"], "a")
        assert selection.index.view == [0, 3]

        selection.next()
        assert selection.selected_index == 3
        assert selection.preview_scroll == 0

        window = selection.visible_window(10)
        assert [line.text for line in window.lines] == ["a", "b", "c", "apple"]
        assert [line.number for line in window.lines] == [1, 2, 3, 4]
        assert window.selected_position == 3
        assert window.lines[3].selected
