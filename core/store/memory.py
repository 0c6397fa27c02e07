"""
ChainTrace Store — In-Memory Backend
======================================
Thread-safe in-memory implementation of SupplyChainStore.
Used in tests, bootstrap and single-process deployments.

Concurrency:
- Writes run under one commit lock. A transfer adds its ledger event
  first, then publishes the product's trail as a new tuple, so a
  trail never names an event that is not yet in the ledger.
- Reads take no lock. Dict lookups are atomic and every value is
  immutable (frozen record or tuple).
- custody_scope() hands out one Lock per existing product. It is held
  by the Transfer Authority across read-validate-write and does NOT
  block reads. Unknown products get no lock.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, Optional

from core.primitives import OwnershipEvent, ParticipantRecord, ProductRecord, Role
from core.sequence import (
    SEQUENCE_OWNERSHIP,
    SEQUENCE_PARTICIPANT,
    SEQUENCE_PRODUCT,
    VALID_SEQUENCES,
    SequenceGenerator,
    SequenceSnapshot,
)

logger = logging.getLogger("chaintrace.store")


class InMemorySupplyChainStore:
    """
    In-memory store for participants, products, ownership events
    and provenance trails.

    Sequence counters may be restored from snapshots taken from a
    previous store, so ids continue without reuse.
    """

    def __init__(self, sequences: tuple[SequenceSnapshot, ...] = ()):
        self._commit_lock = threading.RLock()
        self._scope_guard = threading.Lock()
        self._product_locks: Dict[int, threading.Lock] = {}

        self._participants: Dict[int, ParticipantRecord] = {}
        self._products: Dict[int, ProductRecord] = {}
        self._events: Dict[int, OwnershipEvent] = {}
        self._trails: Dict[int, tuple[int, ...]] = {}

        restored = {snap.name: snap for snap in sequences}
        unknown = set(restored) - VALID_SEQUENCES
        if unknown:
            raise ValueError(f"Unknown sequence names: {sorted(unknown)}")

        self._sequences: Dict[str, SequenceGenerator] = {}
        for name in sorted(VALID_SEQUENCES):
            if name in restored:
                self._sequences[name] = SequenceGenerator.restore(restored[name])
            else:
                self._sequences[name] = SequenceGenerator(name)

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
        with self._commit_lock:
            record = ParticipantRecord(
                participant_id=self._sequences[SEQUENCE_PARTICIPANT].next(),
                username=username,
                credential=credential,
                role=role,
                identity=identity,
            )
            self._participants[record.participant_id] = record
        return record

    def get_participant(self, participant_id: int) -> Optional[ParticipantRecord]:
        return self._participants.get(participant_id)

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
        with self._commit_lock:
            record = ProductRecord(
                product_id=self._sequences[SEQUENCE_PRODUCT].next(),
                model_number=model_number,
                part_number=part_number,
                serial_number=serial_number,
                custodian=custodian,
                cost=cost,
                manufactured_at=manufactured_at,
            )
            self._products[record.product_id] = record
        return record

    def get_product(self, product_id: int) -> Optional[ProductRecord]:
        return self._products.get(product_id)

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
        with self._commit_lock:
            event = self.append_ownership_event(
                product_id=product_id,
                custodian=custodian,
                recorded_at=recorded_at,
            )
            self._trails[product_id] = (
                self._trails.get(product_id, ()) + (event.event_id,)
            )
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
        with self._commit_lock:
            if product_id not in self._products:
                raise ValueError(
                    f"Cannot record ownership for unknown product {product_id}."
                )
            event = OwnershipEvent(
                event_id=self._sequences[SEQUENCE_OWNERSHIP].next(),
                product_id=product_id,
                custodian=custodian,
                recorded_at=recorded_at,
            )
            self._events[event.event_id] = event
        return event

    def append_trail_entry(self, product_id: int, event_id: int) -> None:
        with self._commit_lock:
            self._trails[product_id] = (
                self._trails.get(product_id, ()) + (event_id,)
            )

    def get_ownership_event(self, event_id: int) -> Optional[OwnershipEvent]:
        return self._events.get(event_id)

    def get_trail(self, product_id: int) -> tuple[int, ...]:
        return self._trails.get(product_id, ())

    def is_event_in_any_trail(self, event_id: int) -> bool:
        return any(event_id in trail for trail in list(self._trails.values()))

    # ══════════════════════════════════════════════════════════
    # CONCURRENCY + LIFECYCLE
    # ══════════════════════════════════════════════════════════

    def _lock_for(self, product_id: int) -> threading.Lock:
        if product_id not in self._products:
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
            yield

    def sequence_snapshots(self) -> tuple[SequenceSnapshot, ...]:
        with self._commit_lock:
            return tuple(
                self._sequences[name].snapshot()
                for name in sorted(self._sequences)
            )

    @property
    def participant_count(self) -> int:
        return len(self._participants)

    @property
    def product_count(self) -> int:
        return len(self._products)

    @property
    def event_count(self) -> int:
        return len(self._events)

    @property
    def scope_count(self) -> int:
        with self._scope_guard:
            return len(self._product_locks)
