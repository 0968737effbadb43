"""
Event System

Subscription registry and the buffered emitter built on it.
"""

from .subscription_registry import SubscriptionRegistry, validate_event_name
from .buffered_emitter import BufferedEventEmitter

__all__ = [
    "BufferedEventEmitter",
    "SubscriptionRegistry",
    "validate_event_name",
]
