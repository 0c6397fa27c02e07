"""
ChainTrace Event Bus — Errors
===============================
Raised while wiring subscribers, never while publishing.
"""


class EventBusError(Exception):
    pass


class UnknownEventType(EventBusError):
    """No engine publishes this event type."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(f"No engine publishes '{event_type}'.")


class DuplicateSubscriberError(EventBusError):
    """The same handler is already subscribed to this event type."""

    def __init__(self, event_type: str, subscriber_name: str):
        self.event_type = event_type
        self.subscriber_name = subscriber_name
        super().__init__(
            f"Subscriber '{subscriber_name}' already receives '{event_type}'."
        )
