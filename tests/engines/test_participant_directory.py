"""
ChainTrace Participants Engine — Tests
========================================
register → get → authenticate.
"""

from datetime import datetime, timezone

import pytest

from core.commands import CommandDispatcher
from core.context import ActorContext
from core.errors import InvalidRole, ParticipantNotFound
from core.events import SubscriberRegistry
from core.primitives import ParticipantView, Role
from core.store import InMemorySupplyChainStore
from core.time import FixedClock

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
HOST = ActorContext.system()


def _svc(subscribers=None):
    from engines.participants.services import ParticipantService

    return ParticipantService(
        store=InMemorySupplyChainStore(),
        dispatcher=CommandDispatcher(clock=FixedClock(NOW)),
        clock=FixedClock(NOW),
        subscribers=subscribers,
    )


class TestParticipantCommands:
    def test_register_request_to_command(self):
        from engines.participants.commands import ParticipantRegisterRequest

        cmd = ParticipantRegisterRequest(
            username="acme", credential="pw", role="Supplier", identity="0xS",
        ).to_command(actor=HOST, issued_at=NOW)

        assert cmd.command_type == "participants.participant.register.request"
        assert cmd.payload["role"] == "Supplier"

    def test_lowercase_role_rejected(self):
        from engines.participants.commands import ParticipantRegisterRequest

        with pytest.raises(InvalidRole):
            ParticipantRegisterRequest(
                username="acme", credential="pw", role="manufacturer", identity="0xM",
            )

    def test_empty_username_rejected(self):
        from engines.participants.commands import ParticipantRegisterRequest

        with pytest.raises(ValueError, match="username"):
            ParticipantRegisterRequest(
                username="", credential="pw", role=Role.SUPPLIER, identity="0xS",
            )


class TestRegistration:
    def test_ids_strictly_increase_from_zero(self):
        svc = _svc()
        ids = [
            svc.register(f"user-{i}", "pw", Role.SUPPLIER, f"0x{i}", actor=HOST)
            for i in range(5)
        ]
        assert ids == [0, 1, 2, 3, 4]

    def test_duplicate_usernames_allowed(self):
        svc = _svc()
        first = svc.register("acme", "pw", "Manufacturer", "0xA", actor=HOST)
        second = svc.register("acme", "pw", "Manufacturer", "0xB", actor=HOST)
        assert first != second
        assert svc.get(first).username == svc.get(second).username == "acme"

    def test_invalid_role_text_registers_nothing(self):
        svc = _svc()
        with pytest.raises(InvalidRole):
            svc.register("acme", "pw", "manufacturer", "0xA", actor=HOST)
        with pytest.raises(InvalidRole):
            svc.register("acme", "pw", "Retailer", "0xA", actor=HOST)
        assert svc.register("acme", "pw", "Manufacturer", "0xA", actor=HOST) == 0

    def test_registration_published_without_credential(self):
        subscribers = SubscriberRegistry()
        received = []
        subscribers.subscribe(
            "participants.participant.registered.v1", received.append, "audit",
        )

        _svc(subscribers).register("acme", "s3cret", "Consumer", "0xC", actor=HOST)

        payload = received[0].payload
        assert payload["participant_id"] == 0
        assert payload["role"] == "Consumer"
        assert "credential" not in payload
        assert "s3cret" not in str(payload)


class TestLookup:
    def test_get_returns_public_view(self):
        svc = _svc()
        pid = svc.register("acme", "pw", Role.MANUFACTURER, "0xM", actor=HOST)

        view = svc.get(pid)

        assert view == ParticipantView(username="acme", identity="0xM", role=Role.MANUFACTURER)
        username, identity, role = view
        assert (username, identity, role) == ("acme", "0xM", Role.MANUFACTURER)

    def test_unknown_id_raises(self):
        svc = _svc()
        with pytest.raises(ParticipantNotFound) as exc_info:
            svc.get(42)
        assert exc_info.value.record_id == 42
        with pytest.raises(LookupError):
            svc.get_record(42)

    def test_repeated_get_is_stable(self):
        svc = _svc()
        pid = svc.register("acme", "pw", Role.SUPPLIER, "0xS", actor=HOST)
        assert svc.get(pid) == svc.get(pid)
        assert svc.role_of(pid) is Role.SUPPLIER


class TestAuthenticate:
    def _registered(self):
        svc = _svc()
        pid = svc.register("acme", "pw", Role.SUPPLIER, "0xS", actor=HOST)
        return svc, pid

    def test_all_fields_match(self):
        svc, pid = self._registered()
        assert svc.authenticate(pid, "acme", "Supplier", "pw") is True
        assert svc.authenticate(pid, "acme", Role.SUPPLIER, "pw") is True

    @pytest.mark.parametrize(
        "username, role, credential",
        [
            ("ACME", "Supplier", "pw"),
            ("acme", "Consumer", "pw"),
            ("acme", "Supplier", "PW"),
            ("acme", "supplier", "pw"),
            ("acme", "Retailer", "pw"),
        ],
    )
    def test_any_mismatch_is_false(self, username, role, credential):
        svc, pid = self._registered()
        assert svc.authenticate(pid, username, role, credential) is False

    def test_unknown_id_is_false(self):
        svc, _ = self._registered()
        assert svc.authenticate(99, "acme", "Supplier", "pw") is False
