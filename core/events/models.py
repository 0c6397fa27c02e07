"""
ChainTrace Event Bus — Domain Event Envelope
==============================================
Immutable envelope handed to subscribers after a store commit.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class DomainEvent:
    event_type: str
    source_engine: str
    payload: dict
    occurred_at: datetime
    event_id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self):
        if not self.event_type or not isinstance(self.event_type, str):
            raise ValueError("event_type must be a non-empty string.")
        if not isinstance(self.payload, dict):
            raise TypeError("payload must be a dict.")
        if not isinstance(self.occurred_at, datetime):
            raise ValueError("occurred_at must be a datetime.")
