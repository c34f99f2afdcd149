"""Tests for SearchIndex filtering and match spans."""

import pytest

from greptap.search import SearchIndex


def build(lines: list[str], query: str = "") -> SearchIndex:
    index = SearchIndex()
    if query:
        index.set_query(query)
    for line in lines:
        index.append(line)
    return index


LINES = ["INFO start", "WARNING disk", "ERROR boom", "INFO done", "", "warning lower"]


class TestEmptyQuery:
    def test_view_is_identity(self):
        """With no query every appended line is in the view, in order."""
        index = build(LINES)
        assert index.view == list(range(len(LINES)))

    def test_append_reports_acceptance(self):
        index = SearchIndex()
        assert index.append("anything") is True
        assert index.line_count == 1

    def test_clearing_query_restores_identity(self):
        index = build(LINES, "ERROR")
        index.set_query("")
        assert index.view == list(range(len(LINES)))


class TestValidPattern:
    def test_set_query_selects_matching_indices(self):
        index = build(LINES)
        index.set_query("INFO")
        assert index.view == [0, 3]

    def test_pattern_is_unanchored(self):
        index = build(LINES)
        index.set_query("disk")
        assert index.view == [1]

    def test_append_extends_view_incrementally(self):
        """Lines arriving after set_query are filtered with the same pattern."""
        index = build(["a", "b"], "^[ab]$")
        assert index.append("x") is False
        assert index.append("a") is True
        assert index.view == [0, 1, 3]

    def test_incremental_matches_full_rescan(self):
        incremental = build(LINES, "[Ww]arn")
        rescanned = build(LINES)
        rescanned.set_query("[Ww]arn")
        assert incremental.view == rescanned.view == [5]

    def test_view_stays_strictly_increasing(self):
        index = build(LINES)
        index.set_query("o")
        for line in ["foo", "bar", "boo"]:
            index.append(line)
        assert index.view == sorted(set(index.view))
        assert all(i < index.line_count for i in index.view)

    def test_set_query_is_idempotent(self):
        index = build(LINES)
        index.set_query("INFO|ERROR")
        first = list(index.view)
        index.set_query("INFO|ERROR")
        assert index.view == first == [0, 2, 3]


class TestInvalidPattern:
    @pytest.mark.parametrize(
        "query",
        ["[unclosed", "(", "a{2,1}", "*", "a{4294967296}", "(" * 1000 + ")" * 1000],
    )
    def test_invalid_pattern_fails_open(self, query):
        """A pattern that doesn't compile filters nothing."""
        index = build(LINES)
        index.set_query(query)
        assert index.view == list(range(len(LINES)))
        assert index.query == query
        assert not index.query_is_valid

    def test_appends_pass_through_while_invalid(self):
        index = build([], "[")
        index.append("x")
        index.append("y")
        assert index.view == [0, 1]

    def test_no_match_spans_for_invalid_pattern(self):
        index = build([], "[")
        assert index.find_match_spans("[[[") == []


class TestMatchSpans:
    def test_empty_query_has_no_spans(self):
        assert SearchIndex().find_match_spans("anything") == []

    def test_spans_are_ordered_and_non_overlapping(self):
        index = build([], "an")
        assert index.find_match_spans("banana an") == [(1, 3), (3, 5), (7, 9)]

    def test_spans_use_character_offsets(self):
        index = build([], "é+")
        assert index.find_match_spans("caféé!") == [(3, 5)]

    def test_spans_do_not_affect_view(self):
        index = build(["abc"], "b")
        index.find_match_spans("zzz")
        assert index.view == [0]
