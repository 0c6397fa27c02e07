"""
ChainTrace Custody Engine — Transfer Authority Tests
======================================================
Role transition table, custodian check, ledger + trail commit.
"""

from datetime import datetime, timezone

import pytest

from core.bootstrap import build_supply_chain
from core.commands import ReasonCode
from core.context import ActorContext
from core.errors import ParticipantNotFound, ProductNotFound, Unauthorized
from core.events import SubscriberRegistry
from core.primitives import Role
from core.time import FixedClock
from engines.custody.commands import TransferProposalRequest
from engines.custody.policies import proposer_policy

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
HOST = ActorContext.system()


def as_(identity):
    return ActorContext.human(identity)


class Chain:
    """Manufacturer M, suppliers S and S2, consumer C, product P of M."""

    def __init__(self, subscribers=None):
        self.clock = FixedClock(NOW)
        self.sc = build_supply_chain(
            clock=self.clock, backend="memory", subscribers=subscribers,
        )
        reg = self.sc.participants.register
        self.m = reg("acme", "pw", Role.MANUFACTURER, "0xM", actor=HOST)
        self.m2 = reg("rival", "pw", Role.MANUFACTURER, "0xM2", actor=HOST)
        self.s = reg("hub", "pw", Role.SUPPLIER, "0xS", actor=HOST)
        self.s2 = reg("depot", "pw", Role.SUPPLIER, "0xS2", actor=HOST)
        self.c = reg("jane", "pw", Role.CONSUMER, "0xC", actor=HOST)
        self.p = self.sc.catalog.create(self.m, "MX-1", "P-7", "SN-1", 100, actor=as_("0xM"))

    def transfer(self, proposer, recipient, caller, product=None):
        return self.sc.custody.propose_transfer(
            proposer, recipient, self.p if product is None else product, actor=as_(caller),
        )

    @property
    def trail(self):
        return self.sc.provenance.get_trail(self.p)


class TestTransitionTable:
    @pytest.mark.parametrize(
        "from_role, to_role, allowed",
        [
            (Role.MANUFACTURER, Role.SUPPLIER, True),
            (Role.SUPPLIER, Role.SUPPLIER, True),
            (Role.SUPPLIER, Role.CONSUMER, True),
            (Role.MANUFACTURER, Role.MANUFACTURER, False),
            (Role.MANUFACTURER, Role.CONSUMER, False),
            (Role.SUPPLIER, Role.MANUFACTURER, False),
            (Role.CONSUMER, Role.MANUFACTURER, False),
            (Role.CONSUMER, Role.SUPPLIER, False),
            (Role.CONSUMER, Role.CONSUMER, False),
        ],
    )
    def test_closed_table(self, from_role, to_role, allowed):
        from engines.custody.services import TransferAuthority

        assert TransferAuthority.is_transition_allowed(from_role, to_role) is allowed


class TestProposeTransfer:
    def test_manufacturer_to_supplier(self):
        chain = Chain()
        assert chain.transfer(chain.m, chain.s, "0xM") is True
        assert len(chain.trail) == 1
        event = chain.sc.provenance.get_event(chain.trail[0])
        assert event.custodian == "0xS"
        assert event.product_id == chain.p
        assert event.recorded_at == NOW
        assert chain.sc.custody.current_custodian(chain.p) == "0xS"

    def test_manufacturer_to_consumer_is_false(self):
        chain = Chain()
        assert chain.transfer(chain.m, chain.c, "0xM") is False
        assert chain.trail == ()
        assert chain.sc.custody.current_custodian(chain.p) == "0xM"

    def test_manufacturer_to_manufacturer_is_false(self):
        chain = Chain()
        assert chain.transfer(chain.m, chain.m2, "0xM") is False
        assert chain.trail == ()

    def test_full_chain_of_custody(self):
        chain = Chain()
        assert chain.transfer(chain.m, chain.s, "0xM") is True
        chain.clock.advance(60)
        assert chain.transfer(chain.s, chain.s2, "0xS") is True
        chain.clock.advance(60)
        assert chain.transfer(chain.s2, chain.c, "0xS2") is True

        assert len(chain.trail) == 3
        history = chain.sc.provenance.get_history(chain.p)
        assert [e.custodian for e in history] == ["0xS", "0xS2", "0xC"]
        assert list(chain.trail) == sorted(chain.trail)
        assert chain.sc.provenance.get_event(chain.trail[2]).custodian == "0xC"
        assert history[2].recorded_at > history[0].recorded_at

    def test_consumer_cannot_transfer_onward(self):
        chain = Chain()
        chain.transfer(chain.m, chain.s, "0xM")
        chain.transfer(chain.s, chain.c, "0xS")

        assert chain.transfer(chain.c, chain.s, "0xC") is False
        assert len(chain.trail) == 2

    def test_supplier_cannot_return_to_manufacturer(self):
        chain = Chain()
        chain.transfer(chain.m, chain.s, "0xM")
        assert chain.transfer(chain.s, chain.m, "0xS") is False
        assert len(chain.trail) == 1


class TestCustodianCheck:
    def test_non_custodian_unauthorized_even_with_valid_roles(self):
        chain = Chain()
        with pytest.raises(Unauthorized) as exc_info:
            chain.transfer(chain.m, chain.s, "0xS")
        assert exc_info.value.code == ReasonCode.NOT_CUSTODIAN
        assert chain.trail == ()

    def test_non_custodian_unauthorized_even_with_invalid_roles(self):
        chain = Chain()
        with pytest.raises(Unauthorized):
            chain.transfer(chain.c, chain.m, "0xC")
        assert chain.trail == ()

    def test_previous_custodian_loses_authority(self):
        chain = Chain()
        chain.transfer(chain.m, chain.s, "0xM")
        with pytest.raises(Unauthorized):
            chain.transfer(chain.m, chain.s2, "0xM")
        assert len(chain.trail) == 1

    def test_unauthorized_checked_before_participant_lookup(self):
        chain = Chain()
        with pytest.raises(Unauthorized):
            chain.transfer(99, 98, "0xEVE")

    def test_custodian_cannot_borrow_a_supplier_as_proposer(self):
        chain = Chain()
        with pytest.raises(Unauthorized) as exc_info:
            chain.transfer(chain.s, chain.c, "0xM")
        assert exc_info.value.code == ReasonCode.IDENTITY_MISMATCH
        assert chain.trail == ()
        assert chain.sc.custody.current_custodian(chain.p) == "0xM"

    def test_supplier_custodian_cannot_name_the_manufacturer(self):
        chain = Chain()
        chain.transfer(chain.m, chain.s, "0xM")
        with pytest.raises(Unauthorized):
            chain.transfer(chain.m, chain.s2, "0xS")
        assert len(chain.trail) == 1
        assert chain.sc.custody.current_custodian(chain.p) == "0xS"


class TestProposerPolicy:
    def _command(self, chain, proposer, caller):
        return TransferProposalRequest(
            proposer_id=proposer, recipient_id=chain.s, product_id=chain.p,
        ).to_command(actor=as_(caller), issued_at=NOW)

    def test_proposer_matching_caller_passes(self):
        chain = Chain()
        lookup = chain.sc.participants.get_record
        assert proposer_policy(self._command(chain, chain.m, "0xM"), participant_lookup=lookup) is None

    def test_proposer_other_than_caller_rejected(self):
        chain = Chain()
        lookup = chain.sc.participants.get_record
        reason = proposer_policy(self._command(chain, chain.s2, "0xM"), participant_lookup=lookup)
        assert reason.code == ReasonCode.IDENTITY_MISMATCH
        assert reason.policy_name == "proposer_policy"

    def test_no_lookup_skips(self):
        chain = Chain()
        assert proposer_policy(self._command(chain, chain.s2, "0xM")) is None


class TestLookups:
    def test_unknown_product(self):
        chain = Chain()
        with pytest.raises(ProductNotFound):
            chain.transfer(chain.m, chain.s, "0xM", product=55)

    def test_unknown_products_leave_no_custody_locks(self):
        chain = Chain()
        for product_id in range(100, 600):
            with pytest.raises(ProductNotFound):
                chain.transfer(chain.m, chain.s, "0xM", product=product_id)
        assert chain.sc.store.scope_count == 0

    def test_unknown_recipient(self):
        chain = Chain()
        with pytest.raises(ParticipantNotFound):
            chain.transfer(chain.m, 99, "0xM")
        assert chain.trail == ()

    def test_non_integer_ids_rejected(self):
        chain = Chain()
        with pytest.raises(ValueError):
            chain.sc.custody.propose_transfer("0", chain.s, chain.p, actor=as_("0xM"))


class TestPublishing:
    def test_transfer_and_rejection_events(self):
        subscribers = SubscriberRegistry()
        transferred, rejected = [], []
        subscribers.subscribe(
            "custody.product.transferred.v1", transferred.append, "audit",
        )
        subscribers.subscribe(
            "custody.product.transfer.rejected", rejected.append, "audit",
        )
        chain = Chain(subscribers)

        chain.transfer(chain.m, chain.c, "0xM")
        chain.transfer(chain.m, chain.s, "0xM")
        with pytest.raises(Unauthorized):
            chain.transfer(chain.s, chain.c, "0xEVE")

        assert len(transferred) == 1
        assert transferred[0].payload["custodian"] == "0xS"
        assert transferred[0].payload["trail_length"] == 1
        codes = [event.payload["reason"]["code"] for event in rejected]
        assert codes == [ReasonCode.ROLE_TRANSITION_NOT_ALLOWED, ReasonCode.NOT_CUSTODIAN]

    def test_failing_subscriber_does_not_undo_transfer(self):
        subscribers = SubscriberRegistry()

        def broken(event):
            raise RuntimeError("downstream offline")

        subscribers.subscribe("custody.product.transferred.v1", broken, "sync")
        chain = Chain(subscribers)

        assert chain.transfer(chain.m, chain.s, "0xM") is True
        assert len(chain.trail) == 1
