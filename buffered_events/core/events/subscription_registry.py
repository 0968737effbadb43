"""
Subscription Registry

Maps event names to ordered handler lists and dispatches immediate
(unbuffered) emissions.

Features:
- Duplicate registrations are kept; each one is called and removed separately
- Unsubscriber functions returned from subscribe
- Emission statistics
"""

from __future__ import annotations
import time
from typing import Any, Dict, Iterable, List

from buffered_events.core.errors import InvalidEventNameError
from buffered_events.core.types.event_types import EventHandler, Unsubscriber
from buffered_events.utils.logging import Logger


def validate_event_name(event_name: Any) -> str:
    """Raise InvalidEventNameError unless event_name is a non-empty string."""
    if not isinstance(event_name, str) or not event_name:
        raise InvalidEventNameError(event_name)
    return event_name


def _new_stats() -> Dict[str, Any]:
    return {
        "events_emitted": 0,
        "callbacks_invoked": 0,
        "last_event_time": None,
    }


class SubscriptionRegistry:
    """
    Ordered event name -> handlers mapping with synchronous emission.

    Handler errors are not contained: an exception raised by a handler
    propagates to the emitter's caller and stops the remaining handlers
    of that emission.

    Not safe for concurrent use; callers serialize access in
    multi-threaded hosts.
    """

    def __init__(self, name: str = "SubscriptionRegistry", log_level: str = "info"):
        self.name = name
        self.registry_logger = Logger(name, "registry", log_level)

        self._handlers: Dict[str, List[EventHandler]] = {}
        self._stats = _new_stats()

    # === Subscription ===

    def subscribe(self, event_name: str, handler: EventHandler) -> Unsubscriber:
        """
        Append a handler to an event's handler list.

        Args:
            event_name: Non-empty event name
            handler: Any callable; receives the emitted positional arguments

        Returns:
            Unsubscriber: Removes this registration when called; further
            calls are no-ops.
        """
        validate_event_name(event_name)
        self._handlers.setdefault(event_name, []).append(handler)
        self.registry_logger.debug(f"Subscribed handler to '{event_name}'")

        unsubscribed = False

        def unsubscribe() -> None:
            nonlocal unsubscribed
            if unsubscribed:
                return
            unsubscribed = True
            self.unsubscribe(event_name, handler)

        return unsubscribe

    def subscribe_multiple(
        self, event_names: Iterable[str], handler: EventHandler
    ) -> Unsubscriber:
        """Subscribe one handler to several events; returns one unsubscriber."""
        unsubscribers = [self.subscribe(name, handler) for name in event_names]

        def unsubscribe_all() -> None:
            for unsubscribe in unsubscribers:
                unsubscribe()

        return unsubscribe_all

    def unsubscribe(self, event_name: str, handler: EventHandler) -> None:
        """Remove the first registration of this exact handler object, if any.

        Matching is by identity. A bound method is a new object on every
        attribute access, so keep the reference (or the unsubscriber
        returned by subscribe) to remove it.
        """
        handlers = self._handlers.get(event_name)
        if not handlers:
            return
        index = next((i for i, h in enumerate(handlers) if h is handler), None)
        if index is not None:
            del handlers[index]
            self.registry_logger.debug(f"Unsubscribed handler from '{event_name}'")

    def unsubscribe_multiple(
        self, event_names: Iterable[str], handler: EventHandler
    ) -> None:
        for event_name in event_names:
            self.unsubscribe(event_name, handler)

    def unsubscribe_all(self, event_names: Iterable[str]) -> None:
        """Drop every handler registered for each of event_names."""
        for event_name in event_names:
            if self._handlers.pop(event_name, None) is not None:
                self.registry_logger.debug(f"Removed all handlers for '{event_name}'")

    def clear_all_subscriptions(self) -> None:
        self._handlers.clear()

    # === Emission ===

    def emit(self, event_name: str, *args: Any) -> None:
        """
        Call every handler registered for event_name with args.

        Handlers run synchronously in registration order over a snapshot
        of the handler list taken before the first call: handlers added
        during the emission are skipped, handlers removed during it still
        run. Unknown event names are a no-op.
        """
        self.registry_logger.debug(f"Emitting event '{event_name}'")
        self._stats["events_emitted"] += 1
        self._stats["last_event_time"] = time.time()

        handlers = self._handlers.get(event_name)
        if not handlers:
            return

        for handler in list(handlers):
            handler(*args)
            self._stats["callbacks_invoked"] += 1

    # === Utility Methods ===

    def has_subscribers(self, event_name: str) -> bool:
        return bool(self._handlers.get(event_name))

    def get_subscriber_count(self, event_name: str) -> int:
        return len(self._handlers.get(event_name, ()))

    def event_names(self) -> List[str]:
        """Event names with at least one handler, in first-subscribed order."""
        return [name for name, handlers in self._handlers.items() if handlers]

    def get_stats(self) -> Dict[str, Any]:
        return {
            **self._stats,
            "total_callbacks": sum(len(h) for h in self._handlers.values()),
        }

    def clear_stats(self) -> None:
        self._stats = _new_stats()
