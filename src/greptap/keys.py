"""Key dispatch for the interactive session.

PUBLIC API:
  - handle_key: Apply a key press to the session state, report quit requests
  - QUIT_KEYS: Keys that end the session from any panel
"""

from .state import SessionState
from .types import Panel

__all__ = ["handle_key", "QUIT_KEYS"]

QUIT_KEYS = frozenset(["ctrl+c", "ctrl+q"])

# Many terminals send backtab for shift+tab
_BACKWARD_KEYS = frozenset(["shift+tab", "backtab"])


def _handle_query_key(state: SessionState, key: str, character: str | None) -> None:
    editor = state.editor
    if key == "backspace":
        if editor.backspace():
            state.apply_editor()
    elif key == "delete":
        if editor.delete():
            state.apply_editor()
    elif key == "left":
        editor.left()
    elif key == "right":
        editor.right()
    elif key == "home":
        editor.home()
    elif key == "end":
        editor.end()
    elif key == "enter":
        state.commit_query()
    elif character and character.isprintable():
        editor.insert(character)
        state.apply_editor()
    else:
        return
    state.dirty = True


def handle_key(state: SessionState, key: str, character: str | None = None) -> bool:
    """Handle one key press.

    Args:
        state: Session state to mutate.
        key: Key name as Textual reports it ("tab", "ctrl+c", "a", ...).
        character: Printable character for the key, if any.

    Returns:
        True if the session should end.
    """
    if key in QUIT_KEYS:
        return True

    if key in _BACKWARD_KEYS:
        state.prev_panel()
    elif key == "tab":
        state.next_panel()
    elif state.panel is Panel.QUERY:
        _handle_query_key(state, key, character)
    elif state.panel is Panel.RESULTS:
        if key == "down":
            state.select_next()
        elif key == "up":
            state.select_prev()
    return False
