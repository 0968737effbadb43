"""
Types

Event names, handler aliases and the buffer record.
"""

from .event_types import (
    BufferLifecycleEvent,
    BufferedEvents,
    BufferId,
    CLEAN_BUFFER_EVENT_NAME,
    EventHandler,
    FLUSH_BUFFER_EVENT_NAME,
    Unsubscriber,
)
from .buffer_types import Buffer, shallow_copy, snapshot_events

__all__ = [
    "Buffer",
    "BufferId",
    "BufferLifecycleEvent",
    "BufferedEvents",
    "CLEAN_BUFFER_EVENT_NAME",
    "EventHandler",
    "FLUSH_BUFFER_EVENT_NAME",
    "Unsubscriber",
    "shallow_copy",
    "snapshot_events",
]
