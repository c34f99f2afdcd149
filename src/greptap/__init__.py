"""Live regex filter for the output of a running command.

Runs a command, captures its stdout line by line and lets the operator
filter and browse the output in a Textual session while the command is
still running. On quit the full capture is written to stdout.

PUBLIC API:
  - SearchIndex: Append-only output buffer with a regex-filtered view
  - SelectionController: Cyclic selection and preview scroll over the view
  - SessionState: Single mutable session model fed by bus events
  - run_session: Wire runner, ticker, app and shutdown for one command
"""

from .search import SearchIndex
from .selection import SelectionController
from .state import SessionState
from .session import run_session

__version__ = "0.1.0"
__all__ = ["SearchIndex", "SelectionController", "SessionState", "run_session"]
