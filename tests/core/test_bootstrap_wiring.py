"""
ChainTrace Bootstrap — Self-Check and Wiring Tests
====================================================
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from django.test import override_settings

from core.bootstrap import SystemBootstrapError, build_supply_chain, run_bootstrap_checks
from core.bootstrap.invariants import (
    check_insert_only_guards,
    check_provenance_integrity,
)
from core.context import ActorContext
from core.store import InMemorySupplyChainStore
from core.time import FixedClock

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestWiring:
    def test_explicit_store_wins(self):
        store = InMemorySupplyChainStore()
        chain = build_supply_chain(store=store, backend="django")
        assert chain.store is store

    def test_services_share_one_store(self):
        chain = build_supply_chain(clock=FixedClock(NOW), backend="memory")
        manufacturer = ActorContext.human("0xM")

        m = chain.participants.register(
            "acme", "pw", "Manufacturer", "0xM", actor=manufacturer,
        )
        s = chain.participants.register(
            "hub", "pw", "Supplier", "0xS", actor=manufacturer,
        )
        p = chain.catalog.create(m, "MX-1", "P-7", "SN-1", 100, actor=manufacturer)

        assert chain.custody.propose_transfer(m, s, p, actor=manufacturer) is True
        assert len(chain.provenance.get_trail(p)) == 1
        assert chain.store.get_product(p).manufactured_at == NOW

    @override_settings(CHAINTRACE={"STORE_BACKEND": "memory"})
    def test_backend_from_settings(self):
        chain = build_supply_chain()
        assert isinstance(chain.store, InMemorySupplyChainStore)

    def test_unknown_backend_refused(self):
        with pytest.raises(SystemBootstrapError) as exc_info:
            build_supply_chain(backend="redis")
        assert exc_info.value.invariant == "STORE_BACKEND"


@pytest.mark.django_db(transaction=True)
class TestSelfCheck:
    def test_checks_pass_on_clean_database(self):
        run_bootstrap_checks()

    def test_guards_verified(self):
        check_insert_only_guards()

    def test_checks_pass_after_transfers(self):
        from core.persistence.store import DjangoSupplyChainStore

        chain = build_supply_chain(store=DjangoSupplyChainStore(), clock=FixedClock(NOW))
        manufacturer = ActorContext.human("0xM")
        supplier = ActorContext.human("0xS")
        m = chain.participants.register("acme", "pw", "Manufacturer", "0xM", actor=manufacturer)
        s = chain.participants.register("hub", "pw", "Supplier", "0xS", actor=manufacturer)
        s2 = chain.participants.register("hub2", "pw", "Supplier", "0xS2", actor=manufacturer)
        p = chain.catalog.create(m, "MX-1", "P-7", "SN-1", 100, actor=manufacturer)

        assert chain.custody.propose_transfer(m, s, p, actor=manufacturer)
        assert chain.custody.propose_transfer(s, s2, p, actor=supplier)

        check_provenance_integrity()

    def test_foreign_trail_entry_detected(self):
        from core.persistence.models import ProvenanceEntry
        from core.persistence.store import DjangoSupplyChainStore

        store = DjangoSupplyChainStore()
        for serial in ("SN-1", "SN-2"):
            store.add_product(
                model_number="MX-1",
                part_number="P-7",
                serial_number=serial,
                custodian="0xM",
                cost=100,
                manufactured_at=NOW,
            )
        event = store.append_ownership_event(product_id=1, custodian="0xS", recorded_at=NOW)
        ProvenanceEntry.objects.create(product_id=0, position=0, record_id=event.event_id)

        with pytest.raises(SystemBootstrapError) as exc_info:
            check_provenance_integrity()
        assert exc_info.value.invariant == "PROVENANCE_PRODUCT_MISMATCH"


class TestSelfCheckGate:
    def test_memory_backend_never_checks_tables(self):
        from core.bootstrap.apps import should_self_check

        assert should_self_check(["manage.py", "runserver"], "memory") is False

    def test_django_backend_checks_on_start(self):
        from core.bootstrap.apps import should_self_check

        assert should_self_check(["manage.py", "runserver"], "django") is True
        assert should_self_check(["gunicorn"], "django") is True

    def test_migrate_skips_checks(self):
        from core.bootstrap.apps import should_self_check

        assert should_self_check(["manage.py", "migrate"], "django") is False


class TestDefaultSubscribers:
    def test_default_registry_accepts_only_published_types(self):
        from core.events import UnknownEventType

        chain = build_supply_chain(backend="memory")
        chain.subscribers.subscribe("custody.product.transferred.v1", print, "console")
        with pytest.raises(UnknownEventType):
            chain.subscribers.subscribe("custody.product.lost.v1", print, "console")
