"""
ChainTrace Event Bus — Tests
==============================
Committed events are routed; subscriber failures never propagate.
"""

from datetime import datetime, timezone

import pytest

from core.events import (
    DomainEvent,
    DuplicateSubscriberError,
    SubscriberRegistry,
    UnknownEventType,
    dispatch,
)

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
TRANSFERRED = "custody.product.transferred.v1"


def _event(event_type=TRANSFERRED):
    return DomainEvent(
        event_type=event_type,
        source_engine="custody",
        payload={"product_id": 0},
        occurred_at=NOW,
    )


def test_dispatch_without_registry_is_a_no_op():
    result = dispatch(_event(), None)
    assert result["notified"] == 0
    assert result["failures"] == []


def test_subscribers_receive_event():
    registry = SubscriberRegistry()
    received = []
    registry.subscribe(TRANSFERRED, received.append, "audit")

    result = dispatch(_event(), registry)

    assert result["notified"] == 1
    assert received[0].payload == {"product_id": 0}


def test_failing_subscriber_is_isolated():
    registry = SubscriberRegistry()
    received = []

    def broken(event):
        raise RuntimeError("subscriber down")

    registry.subscribe(TRANSFERRED, broken, "broken")
    registry.subscribe(TRANSFERRED, received.append, "audit")

    result = dispatch(_event(), registry)

    assert result["failures"] == [
        {"subscriber": "broken", "error_type": "RuntimeError", "error": "subscriber down"},
    ]
    assert len(received) == 1


def test_duplicate_handler_refused():
    registry = SubscriberRegistry()
    received = []
    registry.subscribe(TRANSFERRED, received.append, "audit")
    with pytest.raises(DuplicateSubscriberError):
        registry.subscribe(TRANSFERRED, received.append, "audit")
    assert len(registry.subscribers_for(TRANSFERRED)) == 1


def test_unpublished_event_type_refused():
    registry = SubscriberRegistry(event_types={TRANSFERRED})
    with pytest.raises(UnknownEventType):
        registry.subscribe("custody.product.transfered.v1", print, "typo")
    registry.subscribe(TRANSFERRED, print, "console")
