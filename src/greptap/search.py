"""Output buffer with an incrementally maintained regex filter.

PUBLIC API:
  - SearchIndex: Append-only line buffer plus the view of matching indices
"""

import logging
import re

__all__ = ["SearchIndex"]

logger = logging.getLogger(__name__)


class SearchIndex:
    """Append-only output buffer and the regex-filtered view over it.

    The view holds buffer indices, strictly increasing. It is rebuilt from
    scratch when the query changes and extended one line at a time while the
    query stays the same.

    Filtering rule for a line:
    - empty query: always in the view
    - query that does not compile: always in the view (fail-open)
    - valid pattern: in the view if the pattern matches anywhere in the line

    An invalid query is never reported to the user, it just stops filtering.

    Attributes:
        query: Current filter pattern as typed.
        pattern: Compiled query, None when empty or invalid.
    """

    def __init__(self):
        self._lines: list[str] = []
        self._view: list[int] = []
        self.query = ""
        self.pattern: re.Pattern | None = None

    @property
    def lines(self) -> list[str]:
        return self._lines

    @property
    def view(self) -> list[int]:
        return self._view

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def view_length(self) -> int:
        return len(self._view)

    @property
    def query_is_valid(self) -> bool:
        """True when a non-empty query compiled."""
        return self.pattern is not None

    def underlying_index(self, position: int) -> int:
        """Buffer index of the view entry at position."""
        return self._view[position]

    def append(self, line: str) -> bool:
        """Add a captured line and extend the view if it passes the filter.

        Returns:
            True if the line entered the view.
        """
        index = len(self._lines)
        self._lines.append(line)
        if self._accepts(line):
            self._view.append(index)
            return True
        return False

    def set_query(self, query: str) -> None:
        """Replace the query and rebuild the view over the whole buffer."""
        self.query = query
        self.pattern = self._compile(query)
        self._view = [i for i, line in enumerate(self._lines) if self._accepts(line)]
        logger.debug(f"Query {query!r} matched {len(self._view)}/{len(self._lines)} lines")

    def find_match_spans(self, line: str) -> list[tuple[int, int]]:
        """Character offsets of every match of the query in line.

        Only used to highlight matches. Empty for an empty or invalid query.
        """
        if self.pattern is None:
            return []
        return [m.span() for m in self.pattern.finditer(line)]

    def _accepts(self, line: str) -> bool:
        if self.pattern is None:
            return True
        return self.pattern.search(line) is not None

    @staticmethod
    def _compile(query: str) -> re.Pattern | None:
        if not query:
            return None
        try:
            return re.compile(query)
        # Huge repeat counts overflow and deep nesting exhausts the parser stack
        except (re.error, OverflowError, RecursionError) as e:
            logger.debug(f"Ignoring invalid pattern {query!r}: {e}")
            return None
