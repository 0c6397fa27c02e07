"""
ChainTrace Participants Engine — Application Service
======================================================
Participant Directory: register → lookup → authenticate.

Records are immutable once registered. Duplicate usernames are
permitted. Credentials are compared in cleartext (known limitation).
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from core.commands.dispatcher import CommandDispatcher
from core.commands.validator import CommandValidationError
from core.context.actor_context import ActorContext
from core.errors import InvalidRole, ParticipantNotFound
from core.events import DomainEvent, SubscriberRegistry, dispatch
from core.primitives.participant import ParticipantRecord, ParticipantView, Role
from core.store.protocol import SupplyChainStore
from core.time.clock import Clock, SystemClock
from engines.participants.commands import ParticipantRegisterRequest
from engines.participants.events import (
    build_participant_registered_payload,
    resolve_participant_event_type,
)

logger = logging.getLogger("chaintrace.participants")


class ParticipantService:
    """Participant Directory application service."""

    def __init__(
        self,
        *,
        store: SupplyChainStore,
        dispatcher: CommandDispatcher,
        clock: Optional[Clock] = None,
        subscribers: Optional[SubscriberRegistry] = None,
    ):
        self._store = store
        self._dispatcher = dispatcher
        self._clock = clock or SystemClock()
        self._subscribers = subscribers

    # ══════════════════════════════════════════════════════════
    # REGISTRATION
    # ══════════════════════════════════════════════════════════

    def register(
        self,
        username: str,
        credential: str,
        role: Union[Role, str],
        identity: str,
        *,
        actor: ActorContext,
    ) -> int:
        """
        Register a participant and return its id.

        Raises:
            InvalidRole:            role text is not an exact role value
            ValueError:             empty username, credential or identity
            CommandValidationError: malformed command
        """
        request = ParticipantRegisterRequest(
            username=username,
            credential=credential,
            role=role,
            identity=identity,
        )
        command = request.to_command(actor=actor, issued_at=self._clock.now_utc())

        outcome = self._dispatcher.dispatch(command)
        if outcome.is_rejected:
            raise CommandValidationError(outcome.reason.code, outcome.reason.message)

        record = self._store.add_participant(
            username=request.username,
            credential=request.credential,
            role=request.role,
            identity=request.identity,
        )
        logger.info(
            f"Participant {record.participant_id} registered "
            f"as {record.role.value} ({record.identity})"
        )

        dispatch(
            DomainEvent(
                event_type=resolve_participant_event_type(command.command_type),
                source_engine=command.source_engine,
                payload=build_participant_registered_payload(command, record),
                occurred_at=command.issued_at,
            ),
            self._subscribers,
        )
        return record.participant_id

    # ══════════════════════════════════════════════════════════
    # LOOKUP
    # ══════════════════════════════════════════════════════════

    def get_record(self, participant_id: int) -> ParticipantRecord:
        record = self._store.get_participant(participant_id)
        if record is None:
            raise ParticipantNotFound(participant_id)
        return record

    def get(self, participant_id: int) -> ParticipantView:
        """(username, identity, role) of a registered participant."""
        return self.get_record(participant_id).view()

    def role_of(self, participant_id: int) -> Role:
        return self.get_record(participant_id).role

    # ══════════════════════════════════════════════════════════
    # AUTHENTICATION
    # ══════════════════════════════════════════════════════════

    def authenticate(
        self,
        participant_id: int,
        username: str,
        role: Union[Role, str],
        credential: str,
    ) -> bool:
        """
        True only when username, role and credential all match the
        stored record exactly. Unknown ids and unparseable role text
        are a plain False, never an error.
        """
        record = self._store.get_participant(participant_id)
        if record is None:
            return False

        try:
            parsed_role = Role.parse(role)
        except InvalidRole:
            return False

        return (
            record.username == username
            and record.role is parsed_role
            and record.credential == credential
        )
