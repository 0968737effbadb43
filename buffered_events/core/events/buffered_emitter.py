"""
Buffered Event Emitter

Publish/subscribe emitter with transactional buffers. Events emitted into
a named buffer are held until the buffer is flushed (replayed to
subscribers) or cleaned (discarded). Both fire a lifecycle event once.

Abandoned buffers are evicted by a probabilistic maintenance pass that
runs on buffer creation and goes through the clean path.

All operations are synchronous and run to completion before returning.
Instances are not thread-safe; serialize access externally.
"""

from __future__ import annotations
import itertools
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from buffered_events.config.settings import EmitterOptions, get_settings
from buffered_events.core.buffers.maintenance import (
    Clock,
    MaintenancePolicy,
    RandomSource,
)
from buffered_events.core.errors import (
    BufferAlreadyExistsError,
    BufferNotFoundError,
    InvalidOptionsError,
)
from buffered_events.core.events.subscription_registry import (
    SubscriptionRegistry,
    validate_event_name,
)
from buffered_events.core.types.buffer_types import (
    Buffer,
    shallow_copy,
    snapshot_events,
)
from buffered_events.core.types.event_types import (
    BufferId,
    CLEAN_BUFFER_EVENT_NAME,
    EventHandler,
    FLUSH_BUFFER_EVENT_NAME,
    Unsubscriber,
)
from buffered_events.utils.logging import Logger


# Suffix for default emitter names, one logger set per instance
_instance_counter = itertools.count(1)


def _new_stats() -> Dict[str, Any]:
    return {
        "events_buffered": 0,
        "buffers_created": 0,
        "buffers_flushed": 0,
        "buffers_cleaned": 0,
        "buffers_evicted": 0,
        "maintenance_runs": 0,
        "maintenance_errors": 0,
    }


class BufferedEventEmitter:
    """
    Event emitter with named, transactional event buffers.

    Handlers receive buffered events with the buffer's context appended as
    the last positional argument. Lifecycle handlers
    (``BUFFER:flush`` / ``BUFFER:clean``) receive
    ``(buffer_id, context, events)`` where ``events`` maps each event name
    to its list of buffered argument lists.
    """

    FLUSH_BUFFER_EVENT_NAME = FLUSH_BUFFER_EVENT_NAME
    CLEAN_BUFFER_EVENT_NAME = CLEAN_BUFFER_EVENT_NAME

    def __init__(
        self,
        options: Optional[Union[EmitterOptions, Dict[str, Any]]] = None,
        *,
        ttl_seconds: Optional[float] = None,
        maintenance_chance_percent: Optional[float] = None,
        random_source: Optional[RandomSource] = None,
        clock: Optional[Clock] = None,
        registry: Optional[SubscriptionRegistry] = None,
        name: Optional[str] = None,
    ):
        """
        Args:
            options: EmitterOptions or a dict of its fields; unset fields
                fall back to the global settings
            ttl_seconds: Overrides options.ttl_seconds
            maintenance_chance_percent: Overrides
                options.maintenance_chance_percent
            random_source: Zero-argument callable returning a float in
                [0, 1), used for the maintenance draw
            clock: Zero-argument callable returning wall-clock seconds
            registry: Subscription registry to dispatch through
            name: Logger name prefix for this emitter; defaults to a
                unique "BufferedEventEmitter-<n>"

        Raises:
            InvalidOptionsError: If the merged options fail validation
        """
        self.name = name or f"BufferedEventEmitter-{next(_instance_counter)}"
        self.options = self._resolve_options(
            options,
            ttl_seconds=ttl_seconds,
            maintenance_chance_percent=maintenance_chance_percent,
        )

        self.emitter_logger = Logger(self.name, "emitter", self.options.log_level)
        self.maintenance_logger = Logger(
            f"{self.name}:maintenance", "maintenance", self.options.log_level
        )

        self._registry = registry or SubscriptionRegistry(
            name=f"{self.name}:registry", log_level=self.options.log_level
        )
        self._maintenance = MaintenancePolicy(
            ttl_seconds=self.options.ttl_seconds,
            chance_percent=self.options.maintenance_chance_percent,
            random_source=random_source,
            clock=clock,
        )

        self._buffers: Dict[BufferId, Buffer] = {}
        self._stats = _new_stats()

        self._debug = False
        if self.options.debug:
            self.debug_enable(True)

    @staticmethod
    def _resolve_options(
        options: Optional[Union[EmitterOptions, Dict[str, Any]]],
        **overrides: Any,
    ) -> EmitterOptions:
        if isinstance(options, EmitterOptions):
            values = options.model_dump(exclude_unset=True)
        else:
            values = dict(options or {})
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return get_settings().emitter_options(**values)
        except ValidationError as e:
            raise InvalidOptionsError(f"Invalid emitter options: {e}") from e

    # === Debugging ===

    @property
    def debug_enabled(self) -> bool:
        return self._debug

    def debug_enable(self, enabled: bool) -> None:
        """Trace every emitter operation at DEBUG level, or stop tracing."""
        self._debug = bool(enabled)
        level = "DEBUG" if self._debug else self.options.log_level
        self.emitter_logger.set_level(level)
        self.maintenance_logger.set_level(level)
        self._registry.registry_logger.set_level(level)

    # === Buffers ===

    def create_buffer(self, buffer_id: BufferId, context: Any = None) -> None:
        """
        Create a named buffer holding a shallow copy of context.

        May run a maintenance pass first; maintenance failures are logged
        and never raised from here.

        Raises:
            BufferAlreadyExistsError: If buffer_id is still live
        """
        self.emitter_logger.debug(f"Trying to create buffer {buffer_id}")
        self._check_maintenance()

        if buffer_id in self._buffers:
            raise BufferAlreadyExistsError(buffer_id)

        now = self._maintenance.now()
        self._buffers[buffer_id] = Buffer(
            id=buffer_id,
            context=shallow_copy(context),
            created_at=now,
            last_activity_at=now,
        )
        self._stats["buffers_created"] += 1
        self.emitter_logger.debug(f"Buffer {buffer_id} created")

    def emit_buffered(self, buffer_id: BufferId, event_name: str, *args: Any) -> None:
        """
        Hold an event in a buffer until it is flushed.

        No handler is called. The buffer's last activity time is refreshed.

        Raises:
            InvalidEventNameError: If event_name is not a non-empty string
            BufferNotFoundError: If buffer_id is not live
        """
        validate_event_name(event_name)
        self.emitter_logger.debug(
            f"Emitting buffered event {event_name} on buffer {buffer_id}"
        )
        buffer = self._get_buffer(buffer_id)
        buffer.append(event_name, list(args), self._maintenance.now())
        self._stats["events_buffered"] += 1

    def flush(self, buffer_id: BufferId) -> bool:
        """
        Dispatch a buffer's events, then delete the buffer.

        Fires ``BUFFER:flush`` once, then replays every buffered entry in
        order: event names by first use, entries by append order, with the
        context appended as the last argument. Entries for events nobody
        subscribes to are dropped.

        Returns:
            bool: Whether deletion removed the buffer. False only when a
            handler already removed it during dispatch; dispatch still
            happened.

        Raises:
            BufferNotFoundError: If buffer_id is not live
        """
        self.emitter_logger.debug(f"Trying to flush buffer {buffer_id}")
        snapshot = self._get_buffer(buffer_id).copy()

        self._emit_lifecycle(FLUSH_BUFFER_EVENT_NAME, snapshot)

        self.emitter_logger.debug(f"Calling handlers for buffered events of {buffer_id}")
        for event_name, entries in snapshot.events.items():
            if not self._registry.has_subscribers(event_name):
                self.emitter_logger.debug(
                    f"No handlers for {event_name}, dropping {len(entries)} event(s)"
                )
                continue
            for args in entries:
                self._registry.emit(event_name, *args, shallow_copy(snapshot.context))

        self._stats["buffers_flushed"] += 1
        return self._delete_buffer(buffer_id)

    def clean_buffer(self, buffer_id: BufferId) -> bool:
        """
        Delete a buffer without dispatching its events.

        Only ``BUFFER:clean`` fires, with the same arguments as
        ``BUFFER:flush``.

        Raises:
            BufferNotFoundError: If buffer_id is not live
        """
        self.emitter_logger.debug(f"Cleaning buffer {buffer_id}")
        snapshot = self._get_buffer(buffer_id).copy()

        self._emit_lifecycle(CLEAN_BUFFER_EVENT_NAME, snapshot)

        self._stats["buffers_cleaned"] += 1
        return self._delete_buffer(buffer_id)

    def has_buffer(self, buffer_id: BufferId) -> bool:
        return buffer_id in self._buffers

    def buffer_ids(self) -> List[BufferId]:
        return list(self._buffers)

    @property
    def buffer_count(self) -> int:
        return len(self._buffers)

    def get_buffer(self, buffer_id: BufferId) -> Buffer:
        """Detached copy of a live buffer record."""
        return self._get_buffer(buffer_id).copy()

    def _get_buffer(self, buffer_id: BufferId) -> Buffer:
        try:
            return self._buffers[buffer_id]
        except KeyError:
            raise BufferNotFoundError(buffer_id) from None

    def _delete_buffer(self, buffer_id: BufferId) -> bool:
        removed = self._buffers.pop(buffer_id, None) is not None
        if removed:
            self.emitter_logger.debug(f"Buffer {buffer_id} deleted")
        else:
            self.emitter_logger.warning(
                f"Buffer {buffer_id} was removed while its handlers ran"
            )
        return removed

    def _emit_lifecycle(self, event_name: str, snapshot: Buffer) -> None:
        if self._registry.has_subscribers(event_name):
            self.emitter_logger.debug(f"Calling handlers for {event_name}")
        self._registry.emit(
            event_name,
            snapshot.id,
            shallow_copy(snapshot.context),
            snapshot_events(snapshot.events),
        )

    # === Maintenance ===

    def run_maintenance(self) -> List[BufferId]:
        """
        Evict every buffer idle longer than the TTL via the clean path.

        Returns:
            List of evicted buffer ids. Errors raised by ``BUFFER:clean``
            handlers propagate from this direct call.
        """
        self.maintenance_logger.debug("Running maintenance...")
        self._stats["maintenance_runs"] += 1

        evicted = []
        for buffer_id in self._maintenance.expired_ids(list(self._buffers.values())):
            # A clean handler may already have removed it
            if buffer_id not in self._buffers:
                continue
            self.clean_buffer(buffer_id)
            evicted.append(buffer_id)
            self._stats["buffers_evicted"] += 1

        if evicted:
            self.maintenance_logger.info(f"Evicted {len(evicted)} stale buffer(s)")
        return evicted

    def _check_maintenance(self) -> None:
        self.maintenance_logger.debug("Checking maintenance...")
        if not self._maintenance.should_run():
            return
        try:
            self.run_maintenance()
        except Exception as e:
            self._stats["maintenance_errors"] += 1
            self.maintenance_logger.error(f"Failed to run maintenance: {e}")

    # === Subscriptions ===

    @property
    def registry(self) -> SubscriptionRegistry:
        return self._registry

    def emit(self, event_name: str, *args: Any) -> None:
        """Dispatch an event immediately, bypassing buffers."""
        self._registry.emit(event_name, *args)

    def subscribe(self, event_name: str, handler: EventHandler) -> Unsubscriber:
        return self._registry.subscribe(event_name, handler)

    def subscribe_multiple(
        self, event_names: Iterable[str], handler: EventHandler
    ) -> Unsubscriber:
        return self._registry.subscribe_multiple(event_names, handler)

    def unsubscribe(self, event_name: str, handler: EventHandler) -> None:
        self._registry.unsubscribe(event_name, handler)

    def unsubscribe_multiple(
        self, event_names: Iterable[str], handler: EventHandler
    ) -> None:
        self._registry.unsubscribe_multiple(event_names, handler)

    def unsubscribe_all(self, event_names: Iterable[str]) -> None:
        self._registry.unsubscribe_all(event_names)

    def has_subscribers(self, event_name: str) -> bool:
        return self._registry.has_subscribers(event_name)

    def get_subscriber_count(self, event_name: str) -> int:
        return self._registry.get_subscriber_count(event_name)

    def event_names(self) -> List[str]:
        return self._registry.event_names()

    # === Statistics ===

    def get_stats(self) -> Dict[str, Any]:
        """Emitter and registry statistics."""
        return {
            **self._registry.get_stats(),
            **self._stats,
            "active_buffers": len(self._buffers),
        }

    def clear_stats(self) -> None:
        self._stats = _new_stats()
        self._registry.clear_stats()
