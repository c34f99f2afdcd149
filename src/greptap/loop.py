"""Consumer side of the event bus.

PUBLIC API:
  - DrainPolicy: How many background events one frame applies
  - pump: Receive background events and apply them to the session state
"""

from enum import Enum

from .bus import EventBus
from .state import SessionState

__all__ = ["DrainPolicy", "pump"]


class DrainPolicy(Enum):
    """Background events applied per frame.

    ONE caps ingestion at one line per poll cycle, so a burst of output
    shows up gradually. ALL applies everything pending, so a frame always
    shows every line captured up to that point.
    """

    ONE = "one"
    ALL = "all"


def pump(state: SessionState, bus: EventBus, policy: DrainPolicy = DrainPolicy.ALL) -> int:
    """Run the background-event step of one consumer iteration.

    Never blocks. Must only be called from the consumer.

    Returns:
        Number of events applied.
    """
    limit = 1 if policy is DrainPolicy.ONE else None
    events = bus.drain(limit)
    for event in events:
        state.apply(event)
    return len(events)
