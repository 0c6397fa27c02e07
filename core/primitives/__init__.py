"""
ChainTrace Core Primitives — Custody Building Blocks
======================================================
Primitives are the shared, engine-agnostic records that all
ChainTrace engines consume. They are:

- Pure Python (no Django dependency)
- Immutable (frozen dataclasses)
- Keyed by sequential integer ids

Primitives:
    participant — Role enum, participant record and public view
    product     — Product descriptor
    ownership   — Append-only ownership event
"""

from core.primitives.ownership import OwnershipEvent
from core.primitives.participant import ParticipantRecord, ParticipantView, Role
from core.primitives.product import ProductRecord

__all__ = [
    "OwnershipEvent",
    "ParticipantRecord",
    "ParticipantView",
    "ProductRecord",
    "Role",
]
