"""
ChainTrace Persistence — Repository
=====================================
Low-level ORM helpers used by DjangoSupplyChainStore.

The caller owns transactions and locking. Every helper here returns
frozen primitives, never model instances.
"""

from __future__ import annotations

from typing import Optional

from core.persistence.models import (
    OwnershipRecord,
    Participant,
    Product,
    ProvenanceEntry,
    Sequence,
)
from core.primitives import OwnershipEvent, ParticipantRecord, ProductRecord, Role
from core.sequence import SequenceSnapshot


# ══════════════════════════════════════════════════════════════
# ROW → PRIMITIVE
# ══════════════════════════════════════════════════════════════

def participant_from_row(row: Participant) -> ParticipantRecord:
    return ParticipantRecord(
        participant_id=row.participant_id,
        username=row.username,
        credential=row.credential,
        role=Role.parse(row.role),
        identity=row.identity,
    )


def product_from_row(row: Product) -> ProductRecord:
    return ProductRecord(
        product_id=row.product_id,
        model_number=row.model_number,
        part_number=row.part_number,
        serial_number=row.serial_number,
        custodian=row.custodian,
        cost=row.cost,
        manufactured_at=row.manufactured_at,
    )


def ownership_from_row(row: OwnershipRecord) -> OwnershipEvent:
    return OwnershipEvent(
        event_id=row.event_id,
        product_id=row.product_id,
        custodian=row.custodian,
        recorded_at=row.recorded_at,
    )


# ══════════════════════════════════════════════════════════════
# SEQUENCES
# ══════════════════════════════════════════════════════════════

def issue_next_value(name: str) -> int:
    """
    Consume the next value of a sequence.

    Must run inside transaction.atomic(); the row is locked until
    the surrounding transaction ends.
    """
    row, _ = (
        Sequence.objects.select_for_update()
        .get_or_create(name=name, defaults={"next_value": 0})
    )
    value = row.next_value
    row.next_value = value + 1
    row.save(update_fields=["next_value"])
    return value


def seed_sequence(snapshot: SequenceSnapshot) -> None:
    """Create a counter from a snapshot unless it already exists."""
    Sequence.objects.get_or_create(
        name=snapshot.name,
        defaults={"next_value": snapshot.next_value},
    )


def load_sequence_snapshots(names) -> tuple[SequenceSnapshot, ...]:
    stored = dict(Sequence.objects.values_list("name", "next_value"))
    return tuple(
        SequenceSnapshot(name=name, next_value=stored.get(name, 0))
        for name in sorted(names)
    )


# ══════════════════════════════════════════════════════════════
# LOOKUPS
# ══════════════════════════════════════════════════════════════

def find_participant(participant_id: int) -> Optional[ParticipantRecord]:
    row = Participant.objects.filter(participant_id=participant_id).first()
    return participant_from_row(row) if row is not None else None


def find_product(product_id: int, *, lock: bool = False) -> Optional[ProductRecord]:
    """lock=True takes a row lock on the product for the current transaction."""
    query = Product.objects.filter(product_id=product_id)
    if lock:
        query = query.select_for_update()
    row = query.first()
    return product_from_row(row) if row is not None else None


def find_ownership_record(event_id: int) -> Optional[OwnershipEvent]:
    row = OwnershipRecord.objects.filter(event_id=event_id).first()
    return ownership_from_row(row) if row is not None else None


def load_trail(product_id: int) -> tuple[int, ...]:
    """Ordered event ids, oldest first."""
    return tuple(
        ProvenanceEntry.objects.filter(product_id=product_id)
        .order_by("position")
        .values_list("record_id", flat=True)
    )


def next_trail_position(product_id: int) -> int:
    return ProvenanceEntry.objects.filter(product_id=product_id).count()


def is_recorded(event_id: int) -> bool:
    return ProvenanceEntry.objects.filter(record_id=event_id).exists()
