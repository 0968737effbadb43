from enum import Enum
from typing import Any, Callable, Dict, List, Union


class BufferLifecycleEvent(str, Enum):
    """Reserved events fired once per flush or clean of a buffer."""

    FLUSH = "BUFFER:flush"
    CLEAN = "BUFFER:clean"


FLUSH_BUFFER_EVENT_NAME = BufferLifecycleEvent.FLUSH.value
CLEAN_BUFFER_EVENT_NAME = BufferLifecycleEvent.CLEAN.value

# Buffers are keyed by caller supplied ids
BufferId = Union[str, int]

EventHandler = Callable[..., Any]
Unsubscriber = Callable[[], None]

# event name -> ordered argument lists, one per buffered emission
BufferedEvents = Dict[str, List[List[Any]]]
