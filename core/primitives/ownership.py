"""
ChainTrace Ownership Primitive — Point-in-Time Custody Assignment
===================================================================
Engine: Core Primitives

An OwnershipEvent records that `custodian` took custody of
`product_id` at `recorded_at`. Events are append-only: once
written they are never mutated, corrected or deleted.

This file contains NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class OwnershipEvent:
    event_id: int
    product_id: int
    custodian: str
    recorded_at: datetime

    def __post_init__(self):
        if not isinstance(self.event_id, int) or self.event_id < 0:
            raise ValueError("event_id must be non-negative integer.")
        if not isinstance(self.product_id, int) or self.product_id < 0:
            raise ValueError("product_id must be non-negative integer.")
        if not self.custodian or not isinstance(self.custodian, str):
            raise ValueError("custodian must be non-empty string.")
        if not isinstance(self.recorded_at, datetime):
            raise ValueError("recorded_at must be datetime.")

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "product_id": self.product_id,
            "custodian": self.custodian,
            "recorded_at": self.recorded_at.isoformat(),
        }
