"""Shared fixtures for greptap tests."""

import sys
import time

import pytest

from greptap.bus import EventBus
from greptap.state import SessionState
from greptap.types import Exit, Output


def python_child(code: str) -> list[str]:
    """argv running a snippet in the current interpreter."""
    return [sys.executable, "-c", code]


def collect_until_exit(bus: EventBus, timeout: float = 10.0) -> list:
    """Receive events until Exit arrives or the timeout expires."""
    deadline = time.monotonic() + timeout
    events = []
    while time.monotonic() < deadline:
        event = bus.try_receive()
        if event is None:
            time.sleep(0.01)
            continue
        events.append(event)
        if isinstance(event, Exit):
            break
    return events


def feed(state: SessionState, lines: list[str]) -> SessionState:
    for line in lines:
        state.apply(Output(line))
    return state


@pytest.fixture
def state() -> SessionState:
    return SessionState(command_info="test")


@pytest.fixture
def apple_state(state: SessionState) -> SessionState:
    return feed(state, ["a", "b", "c", "apple"])
