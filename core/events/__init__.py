"""
ChainTrace Event Bus — Public API
===================================
The store commits. The bus tells whoever subscribed.
"""

from core.events.dispatcher import dispatch
from core.events.errors import (
    DuplicateSubscriberError,
    EventBusError,
    UnknownEventType,
)
from core.events.models import DomainEvent
from core.events.registry import SubscriberRegistry

__all__ = [
    "dispatch",
    "DomainEvent",
    "SubscriberRegistry",
    "EventBusError",
    "UnknownEventType",
    "DuplicateSubscriberError",
]
