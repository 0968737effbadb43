import copy
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from buffered_events.core.types.event_types import BufferedEvents, BufferId

# Values returned as-is by shallow_copy
_PRIMITIVE_TYPES = (str, bytes, int, float, complex, bool, type(None), tuple, frozenset)


def shallow_copy(value: Any) -> Any:
    """Return a shallow copy of structured values, primitives unchanged.

    Values that cannot be copied (locks, sockets, ...) are returned as-is.
    """
    if isinstance(value, _PRIMITIVE_TYPES):
        return value
    try:
        return copy.copy(value)
    except (TypeError, copy.Error):
        return value


def snapshot_events(events: BufferedEvents) -> BufferedEvents:
    """Copy the event mapping and its argument lists, not the arguments."""
    return {name: [list(args) for args in entries] for name, entries in events.items()}


@dataclass
class Buffer:
    """A named accumulation of not yet dispatched events."""

    id: BufferId
    context: Any = None
    created_at: float = field(default_factory=time.time)
    last_activity_at: Optional[float] = None
    events: BufferedEvents = field(default_factory=dict)

    def __post_init__(self):
        if self.last_activity_at is None:
            self.last_activity_at = self.created_at

    def append(self, event_name: str, args: list, timestamp: float) -> None:
        """Append one argument list under event_name and mark activity."""
        self.events.setdefault(event_name, []).append(args)
        self.last_activity_at = timestamp

    def idle_seconds(self, now: float) -> float:
        return abs(now - self.last_activity_at)

    @property
    def event_count(self) -> int:
        return sum(len(entries) for entries in self.events.values())

    def copy(self) -> "Buffer":
        """Detached copy; callers cannot mutate stored state through it."""
        return Buffer(
            id=self.id,
            context=shallow_copy(self.context),
            created_at=self.created_at,
            last_activity_at=self.last_activity_at,
            events=snapshot_events(self.events),
        )
