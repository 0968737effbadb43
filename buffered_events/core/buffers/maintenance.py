"""
Stale buffer eviction policy.

Decides when a maintenance pass should run and which buffers it evicts.
Eviction itself goes through the emitter's clean path.
"""

import random
import time
from typing import Callable, Iterable, List, Optional

from buffered_events.core.types.buffer_types import Buffer
from buffered_events.core.types.event_types import BufferId

RandomSource = Callable[[], float]
Clock = Callable[[], float]


class MaintenancePolicy:
    """
    Probabilistic, TTL-based eviction of abandoned buffers.

    A pass is drawn on every buffer creation: it runs when the random
    source returns a value below ``chance_percent / 100``. 100 always
    runs, 0 never does.
    """

    def __init__(
        self,
        ttl_seconds: float,
        chance_percent: float,
        random_source: Optional[RandomSource] = None,
        clock: Optional[Clock] = None,
    ):
        self.ttl_seconds = ttl_seconds
        self.chance_percent = chance_percent
        self.random_source = random_source or random.random
        self.clock = clock or time.time

    def now(self) -> float:
        return self.clock()

    def should_run(self) -> bool:
        return self.random_source() < self.chance_percent / 100

    def is_expired(self, buffer: Buffer, now: Optional[float] = None) -> bool:
        if now is None:
            now = self.now()
        return buffer.idle_seconds(now) > self.ttl_seconds

    def expired_ids(self, buffers: Iterable[Buffer]) -> List[BufferId]:
        """Ids of buffers idle longer than the TTL, in iteration order."""
        now = self.now()
        return [buffer.id for buffer in buffers if self.is_expired(buffer, now)]
