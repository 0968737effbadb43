"""
Buffered Events

Unified import layer for the buffered_events package.
"""

from buffered_events.core.events.buffered_emitter import BufferedEventEmitter
from buffered_events.core.events.subscription_registry import SubscriptionRegistry
from buffered_events.core.types.event_types import (
    BufferLifecycleEvent,
    CLEAN_BUFFER_EVENT_NAME,
    FLUSH_BUFFER_EVENT_NAME,
)
from buffered_events.core.types.buffer_types import Buffer
from buffered_events.config.settings import EmitterOptions
from buffered_events.core.errors import (
    BufferAlreadyExists,
    BufferAlreadyExistsError,
    BufferedEventsError,
    BufferNotFound,
    BufferNotFoundError,
    BufferOperationError,
    InvalidArgument,
    InvalidEventNameError,
    InvalidOptionsError,
)

__all__ = [
    "Buffer",
    "BufferAlreadyExists",
    "BufferAlreadyExistsError",
    "BufferLifecycleEvent",
    "BufferNotFound",
    "BufferNotFoundError",
    "BufferOperationError",
    "BufferedEventEmitter",
    "BufferedEventsError",
    "CLEAN_BUFFER_EVENT_NAME",
    "EmitterOptions",
    "FLUSH_BUFFER_EVENT_NAME",
    "InvalidArgument",
    "InvalidEventNameError",
    "InvalidOptionsError",
    "SubscriptionRegistry",
]
