"""
ChainTrace Event Bus — Dispatcher
===================================
Hands a committed event to each subscriber in subscription order.

The write is already durable when dispatch() runs. A subscriber
that raises is logged and reported in the result; the remaining
subscribers still run and the caller never sees the error.
"""

import logging
from typing import Optional

from core.events.models import DomainEvent
from core.events.registry import SubscriberRegistry

logger = logging.getLogger("chaintrace.events")


def dispatch(event: DomainEvent, registry: Optional[SubscriberRegistry]) -> dict:
    """
    Returns {"event_type", "notified", "failures"} where failures is a
    list of {"subscriber", "error_type", "error"}.
    """
    notified = 0
    failures = []

    subscribers = registry.subscribers_for(event.event_type) if registry else ()
    for handler, name in subscribers:
        try:
            handler(event)
        except Exception as exc:
            failures.append({
                "subscriber": name,
                "error_type": type(exc).__name__,
                "error": str(exc),
            })
            logger.error(
                f"{name} failed on {event.event_type} ({event.event_id})",
                exc_info=True,
            )
        else:
            notified += 1

    return {
        "event_type": event.event_type,
        "notified": notified,
        "failures": failures,
    }
