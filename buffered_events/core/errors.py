"""
Buffered Events — Errors

Error types raised by the subscription registry and the buffer manager.
All of them are raised synchronously to the immediate caller.
"""

from typing import Any

from buffered_events.core.types.event_types import BufferId


class BufferedEventsError(Exception):
    """Base error for buffered event operations."""

    pass


class BufferOperationError(BufferedEventsError):
    """An operation targeted a buffer in the wrong lifecycle state."""

    def __init__(self, buffer_id: BufferId, message: str):
        self.buffer_id = buffer_id
        super().__init__(message)


class BufferAlreadyExistsError(BufferOperationError):
    """A buffer with this id is still live."""

    def __init__(self, buffer_id: BufferId):
        super().__init__(buffer_id, f"Buffer '{buffer_id}' already exists.")


class BufferNotFoundError(BufferOperationError):
    """No live buffer has this id."""

    def __init__(self, buffer_id: BufferId):
        super().__init__(buffer_id, f"Buffer '{buffer_id}' not found.")


class InvalidEventNameError(BufferedEventsError, ValueError):
    """Event names must be non-empty strings."""

    def __init__(self, event_name: Any):
        self.event_name = event_name
        if not isinstance(event_name, str):
            message = (
                f"Event name must be a string, got {type(event_name).__name__}."
            )
        else:
            message = "Event name cannot be empty."
        super().__init__(message)


class InvalidOptionsError(BufferedEventsError, ValueError):
    """Emitter options failed validation."""

    pass


# Names matching the documented error kinds
BufferAlreadyExists = BufferAlreadyExistsError
BufferNotFound = BufferNotFoundError
InvalidArgument = InvalidEventNameError
