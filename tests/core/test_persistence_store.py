"""
ChainTrace Persistence — Django Store Tests
=============================================
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from django.db import IntegrityError, transaction

from core.persistence.models import OwnershipRecord, ProvenanceEntry
from core.persistence.store import DjangoSupplyChainStore
from core.primitives import Role
from core.sequence import SEQUENCE_OWNERSHIP, SEQUENCE_PRODUCT, SequenceSnapshot

pytestmark = pytest.mark.django_db(transaction=True)

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def _product(store: DjangoSupplyChainStore, custodian: str = "0xM"):
    return store.add_product(
        model_number="MX-1",
        part_number="P-7",
        serial_number="SN-001",
        custodian=custodian,
        cost=1500,
        manufactured_at=NOW,
    )


def test_participants_round_trip_with_sequential_ids() -> None:
    store = DjangoSupplyChainStore()
    first = store.add_participant(
        username="acme", credential="pw", role=Role.MANUFACTURER, identity="0xA",
    )
    second = store.add_participant(
        username="acme", credential="pw2", role=Role.CONSUMER, identity="0xB",
    )

    assert (first.participant_id, second.participant_id) == (0, 1)
    assert store.get_participant(1) == second
    assert store.get_participant(7) is None


def test_product_round_trip() -> None:
    store = DjangoSupplyChainStore()
    product = _product(store)

    assert product.product_id == 0
    assert store.get_product(0) == product
    assert store.get_product(1) is None


def test_commit_transfer_writes_ledger_and_trail() -> None:
    store = DjangoSupplyChainStore()
    product = _product(store)

    first = store.commit_transfer(product_id=0, custodian="0xS", recorded_at=NOW)
    second = store.commit_transfer(product_id=0, custodian="0xC", recorded_at=NOW)

    assert store.get_trail(product.product_id) == (first.event_id, second.event_id)
    assert store.get_ownership_event(second.event_id).custodian == "0xC"
    assert store.is_event_in_any_trail(first.event_id)
    assert store.get_trail(99) == ()


def test_unknown_product_writes_nothing() -> None:
    store = DjangoSupplyChainStore()
    with pytest.raises(ValueError, match="unknown product"):
        store.commit_transfer(product_id=3, custodian="0xS", recorded_at=NOW)
    assert OwnershipRecord.objects.count() == 0


def test_ownership_rows_are_insert_only() -> None:
    store = DjangoSupplyChainStore()
    _product(store)
    event = store.commit_transfer(product_id=0, custodian="0xS", recorded_at=NOW)

    row = OwnershipRecord.objects.get(event_id=event.event_id)
    row.custodian = "0xFORGED"
    with pytest.raises(PermissionError):
        row.save()
    with pytest.raises(PermissionError):
        row.delete()

    entry = ProvenanceEntry.objects.get(record_id=event.event_id)
    with pytest.raises(PermissionError):
        entry.delete()

    assert store.get_ownership_event(event.event_id).custodian == "0xS"


def test_trail_position_is_unique_per_product() -> None:
    store = DjangoSupplyChainStore()
    _product(store)
    store.commit_transfer(product_id=0, custodian="0xS", recorded_at=NOW)
    loose = store.append_ownership_event(product_id=0, custodian="0xT", recorded_at=NOW)

    with pytest.raises(IntegrityError):
        with transaction.atomic():
            ProvenanceEntry.objects.create(
                product_id=0, position=0, record_id=loose.event_id,
            )


def test_sequences_survive_a_new_store_instance() -> None:
    DjangoSupplyChainStore().add_participant(
        username="acme", credential="pw", role=Role.MANUFACTURER, identity="0xA",
    )

    reopened = DjangoSupplyChainStore()
    again = reopened.add_participant(
        username="beta", credential="pw", role=Role.SUPPLIER, identity="0xB",
    )
    assert again.participant_id == 1

    snapshots = {snap.name: snap.next_value for snap in reopened.sequence_snapshots()}
    assert snapshots["participant"] == 2
    assert snapshots[SEQUENCE_PRODUCT] == 0


def test_seeded_sequences_are_honoured() -> None:
    store = DjangoSupplyChainStore(sequences=(
        SequenceSnapshot(SEQUENCE_PRODUCT, 5),
        SequenceSnapshot(SEQUENCE_OWNERSHIP, 20),
    ))
    product = _product(store)
    event = store.commit_transfer(
        product_id=product.product_id, custodian="0xS", recorded_at=NOW,
    )
    assert (product.product_id, event.event_id) == (5, 20)


def test_custody_scope_runs_in_a_transaction() -> None:
    store = DjangoSupplyChainStore()
    _product(store)
    with store.custody_scope(0):
        assert transaction.get_connection().in_atomic_block


def test_custody_scope_refuses_unknown_product() -> None:
    store = DjangoSupplyChainStore()
    with pytest.raises(ValueError, match="unknown product"):
        with store.custody_scope(42):
            pass
    assert store._product_locks == {}
