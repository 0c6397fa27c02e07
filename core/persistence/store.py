"""
ChainTrace Persistence — Django Store Backend
===============================================
SupplyChainStore implementation on the Django ORM.

Concurrency:
- Every sequence issue locks its Sequence row (select_for_update)
- commit_transfer() writes the ownership record and its provenance
  entry in one transaction.atomic() block, with the product row locked
- custody_scope() serializes custody decisions per existing product
  inside this process (threading.Lock) and across processes (row lock
  on the product for the duration of the scope's transaction)
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, Optional

from django.db import transaction

from core.persistence import repository
from core.persistence.models import (
    OwnershipRecord,
    Participant,
    Product,
    ProvenanceEntry,
)
from core.primitives import OwnershipEvent, ParticipantRecord, ProductRecord, Role
from core.sequence import (
    SEQUENCE_OWNERSHIP,
    SEQUENCE_PARTICIPANT,
    SEQUENCE_PRODUCT,
    VALID_SEQUENCES,
    SequenceSnapshot,
)

logger = logging.getLogger("chaintrace.store")


class DjangoSupplyChainStore:
    """
    Durable store. Sequence counters live in the Sequence table so
    ids continue across restarts without reuse.
    """

    def __init__(self, sequences: tuple[SequenceSnapshot, ...] = ()):
        self._scope_guard = threading.Lock()
        self._product_locks: Dict[int, threading.Lock] = {}

        unknown = {snap.name for snap in sequences} - VALID_SEQUENCES
        if unknown:
            raise ValueError(f"Unknown sequence names: {sorted(unknown)}")
        for snapshot in sequences:
            repository.seed_sequence(snapshot)

    # ══════════════════════════════════════════════════════════
    # PARTICIPANTS
    # ══════════════════════════════════════════════════════════

    def add_participant(
        self,
        *,
        username: str,
        credential: str,
        role: Role,
        identity: str,
    ) -> ParticipantRecord:
        with transaction.atomic():
            row = Participant.objects.create(
                participant_id=repository.issue_next_value(SEQUENCE_PARTICIPANT),
                username=username,
                credential=credential,
                role=role.value,
                identity=identity,
            )
        return repository.participant_from_row(row)

    def get_participant(self, participant_id: int) -> Optional[ParticipantRecord]:
        return repository.find_participant(participant_id)

    # ══════════════════════════════════════════════════════════
    # PRODUCTS
    # ══════════════════════════════════════════════════════════

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
        with transaction.atomic():
            row = Product.objects.create(
                product_id=repository.issue_next_value(SEQUENCE_PRODUCT),
                model_number=model_number,
                part_number=part_number,
                serial_number=serial_number,
                custodian=custodian,
                cost=cost,
                manufactured_at=manufactured_at,
            )
        return repository.product_from_row(row)

    def get_product(self, product_id: int) -> Optional[ProductRecord]:
        return repository.find_product(product_id)

    # ══════════════════════════════════════════════════════════
    # OWNERSHIP LEDGER + PROVENANCE TRAILS
    # ══════════════════════════════════════════════════════════

    def commit_transfer(
        self,
        *,
        product_id: int,
        custodian: str,
        recorded_at: datetime,
    ) -> OwnershipEvent:
        with transaction.atomic():
            event = self.append_ownership_event(
                product_id=product_id,
                custodian=custodian,
                recorded_at=recorded_at,
            )
            self.append_trail_entry(product_id, event.event_id)
        logger.debug(
            f"Committed ownership event {event.event_id} "
            f"for product {product_id}"
        )
        return event

    def append_ownership_event(
        self,
        *,
        product_id: int,
        custodian: str,
        recorded_at: datetime,
    ) -> OwnershipEvent:
        with transaction.atomic():
            if repository.find_product(product_id, lock=True) is None:
                raise ValueError(
                    f"Cannot record ownership for unknown product {product_id}."
                )
            row = OwnershipRecord.objects.create(
                event_id=repository.issue_next_value(SEQUENCE_OWNERSHIP),
                product_id=product_id,
                custodian=custodian,
                recorded_at=recorded_at,
            )
        return repository.ownership_from_row(row)

    def append_trail_entry(self, product_id: int, event_id: int) -> None:
        with transaction.atomic():
            repository.find_product(product_id, lock=True)
            ProvenanceEntry.objects.create(
                product_id=product_id,
                position=repository.next_trail_position(product_id),
                record_id=event_id,
            )

    def get_ownership_event(self, event_id: int) -> Optional[OwnershipEvent]:
        return repository.find_ownership_record(event_id)

    def get_trail(self, product_id: int) -> tuple[int, ...]:
        return repository.load_trail(product_id)

    def is_event_in_any_trail(self, event_id: int) -> bool:
        return repository.is_recorded(event_id)

    # ══════════════════════════════════════════════════════════
    # CONCURRENCY + LIFECYCLE
    # ══════════════════════════════════════════════════════════

    def _lock_for(self, product_id: int) -> threading.Lock:
        if repository.find_product(product_id) is None:
            raise ValueError(
                f"No custody scope for unknown product {product_id}."
            )
        with self._scope_guard:
            lock = self._product_locks.get(product_id)
            if lock is None:
                lock = threading.Lock()
                self._product_locks[product_id] = lock
            return lock

    @contextmanager
    def custody_scope(self, product_id: int) -> Iterator[None]:
        with self._lock_for(product_id):
            with transaction.atomic():
                repository.find_product(product_id, lock=True)
                yield

    def sequence_snapshots(self) -> tuple[SequenceSnapshot, ...]:
        return repository.load_sequence_snapshots(VALID_SEQUENCES)
