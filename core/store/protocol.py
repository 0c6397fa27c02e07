"""
ChainTrace Store — Backend Protocol
=====================================
Four keyed stores with monotonically increasing integer keys:

    participants        participant_id → ParticipantRecord
    products            product_id     → ProductRecord
    ownership events    event_id       → OwnershipEvent
    provenance trails   product_id     → (event_id, ...)

Plus the three sequence counters that index them.

Rules:
- Lookups return None for unassigned ids (services decide policy)
- Ownership events and trail entries are insert-only
- commit_transfer() writes ledger + trail as ONE unit
- custody_scope() is the per-product critical section used by the
  Transfer Authority for read-validate-write
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from datetime import datetime
from typing import Optional, Protocol

from core.primitives import OwnershipEvent, ParticipantRecord, ProductRecord, Role
from core.sequence import SequenceSnapshot


class SupplyChainStore(Protocol):

    # ── Participants ──────────────────────────────────────────

    def add_participant(
        self,
        *,
        username: str,
        credential: str,
        role: Role,
        identity: str,
    ) -> ParticipantRecord:
        """Assign next participant id and store the record."""
        ...  # pragma: no cover

    def get_participant(self, participant_id: int) -> Optional[ParticipantRecord]:
        ...  # pragma: no cover

    # ── Products ──────────────────────────────────────────────

    def add_product(
        self,
        *,
        model_number: str,
        part_number: str,
        serial_number: str,
        custodian: str,
        cost: int,
        manufactured_at: datetime,
    ) -> ProductRecord:
        """Assign next product id and store the descriptor."""
        ...  # pragma: no cover

    def get_product(self, product_id: int) -> Optional[ProductRecord]:
        ...  # pragma: no cover

    # ── Ownership ledger + provenance trails ──────────────────

    def commit_transfer(
        self,
        *,
        product_id: int,
        custodian: str,
        recorded_at: datetime,
    ) -> OwnershipEvent:
        """Append one ownership event and its trail entry atomically."""
        ...  # pragma: no cover

    def append_ownership_event(
        self,
        *,
        product_id: int,
        custodian: str,
        recorded_at: datetime,
    ) -> OwnershipEvent:
        """Append one ownership event to the ledger only (no trail entry)."""
        ...  # pragma: no cover

    def append_trail_entry(self, product_id: int, event_id: int) -> None:
        """Append an existing ledger event id to a product's trail."""
        ...  # pragma: no cover

    def get_ownership_event(self, event_id: int) -> Optional[OwnershipEvent]:
        ...  # pragma: no cover

    def get_trail(self, product_id: int) -> tuple[int, ...]:
        """Ordered event ids, oldest first. Empty tuple if none."""
        ...  # pragma: no cover

    def is_event_in_any_trail(self, event_id: int) -> bool:
        ...  # pragma: no cover

    # ── Concurrency + lifecycle ───────────────────────────────

    def custody_scope(self, product_id: int) -> AbstractContextManager:
        """
        Per-product mutual exclusion for read-validate-write.
        Refuses (ValueError) a product that was never created.
        """
        ...  # pragma: no cover

    def sequence_snapshots(self) -> tuple[SequenceSnapshot, ...]:
        ...  # pragma: no cover
