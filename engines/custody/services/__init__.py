"""
ChainTrace Custody Engine — Transfer Authority
================================================
The custody state machine: propose → authorize → commit.

Flow:
1. Product must exist                     → ProductNotFound
   (checked before the custody scope is taken)
2. Caller must be the current custodian   → Unauthorized
3. Proposer and recipient must exist      → ParticipantNotFound
4. Proposer must be the caller            → Unauthorized
5. Role pair allowed                      → ledger + trail commit, True
6. Role pair disallowed                   → no mutation, False

Steps 2-6 run under the product's custody scope.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Optional

from core.commands.dispatcher import CommandDispatcher
from core.commands.rejection import ReasonCode
from core.commands.validator import CommandValidationError
from core.context.actor_context import ActorContext
from core.errors import Unauthorized
from core.events import DomainEvent, SubscriberRegistry, dispatch
from core.primitives.participant import Role
from core.store.protocol import SupplyChainStore
from core.time.clock import Clock, SystemClock
from engines.catalog.services import CatalogService
from engines.custody.commands import TransferProposalRequest
from engines.custody.events import (
    PRODUCT_TRANSFER_REJECTED,
    build_product_transferred_payload,
    build_transfer_rejected_payload,
    resolve_custody_event_type,
)
from engines.custody.policies import (
    custodian_policy,
    is_transition_allowed,
    proposer_policy,
    role_transition_policy,
)
from engines.custody.provenance import ProvenanceIndex
from engines.participants.services import ParticipantService

logger = logging.getLogger("chaintrace.custody")


class TransferAuthority:
    """Custody Engine application service."""

    def __init__(
        self,
        *,
        store: SupplyChainStore,
        dispatcher: CommandDispatcher,
        participants: ParticipantService,
        catalog: CatalogService,
        provenance: ProvenanceIndex,
        clock: Optional[Clock] = None,
        subscribers: Optional[SubscriberRegistry] = None,
    ):
        self._store = store
        self._dispatcher = dispatcher
        self._participants = participants
        self._catalog = catalog
        self._provenance = provenance
        self._clock = clock or SystemClock()
        self._subscribers = subscribers

        self._register_policies()

    def _register_policies(self) -> None:
        # Custody, then proposer, then roles: a non-custodian is
        # Unauthorized whatever the role pair.
        self._dispatcher.register_policy(
            partial(custodian_policy, custodian_lookup=self.current_custodian)
        )
        self._dispatcher.register_policy(
            partial(proposer_policy, participant_lookup=self._participants.get_record)
        )
        self._dispatcher.register_policy(
            partial(role_transition_policy, role_lookup=self._participants.role_of)
        )

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def current_custodian(self, product_id: int) -> str:
        return self._provenance.current_custodian(product_id)

    @staticmethod
    def is_transition_allowed(from_role: Role, to_role: Role) -> bool:
        return is_transition_allowed(from_role, to_role)

    # ══════════════════════════════════════════════════════════
    # TRANSFER
    # ══════════════════════════════════════════════════════════

    def propose_transfer(
        self,
        proposer_id: int,
        recipient_id: int,
        product_id: int,
        *,
        actor: ActorContext,
    ) -> bool:
        """
        Move custody of product_id from proposer to recipient.

        Returns True when committed, False when the role pair is not
        allowed.

        Raises:
            ProductNotFound:        unknown product
            Unauthorized:           caller is not the current custodian,
                                    or is not the proposer
            ParticipantNotFound:    unknown proposer or recipient
            CommandValidationError: malformed command
        """
        request = TransferProposalRequest(
            proposer_id=proposer_id,
            recipient_id=recipient_id,
            product_id=product_id,
        )

        self._catalog.get(product_id)

        with self._store.custody_scope(product_id):
            command = request.to_command(
                actor=actor, issued_at=self._clock.now_utc(),
            )
            outcome = self._dispatcher.dispatch(command)

            if outcome.is_accepted:
                recipient = self._participants.get_record(recipient_id)
                event = self._store.commit_transfer(
                    product_id=product_id,
                    custodian=recipient.identity,
                    recorded_at=command.issued_at,
                )
                trail_length = len(self._provenance.get_trail(product_id))

        # Subscribers run outside the custody scope.
        if outcome.is_rejected:
            self._publish_rejection(command, outcome.reason)
            if outcome.is_unauthorized:
                raise Unauthorized(outcome.reason.code, outcome.reason.message)
            if outcome.reason.code == ReasonCode.ROLE_TRANSITION_NOT_ALLOWED:
                return False
            raise CommandValidationError(
                outcome.reason.code, outcome.reason.message,
            )

        logger.info(
            f"Product {product_id} transferred to {recipient.identity} "
            f"(event {event.event_id}, trail length {trail_length})"
        )
        dispatch(
            DomainEvent(
                event_type=resolve_custody_event_type(command.command_type),
                source_engine=command.source_engine,
                payload=build_product_transferred_payload(
                    command, event, trail_length,
                ),
                occurred_at=command.issued_at,
            ),
            self._subscribers,
        )
        return True

    def _publish_rejection(self, command, reason) -> None:
        dispatch(
            DomainEvent(
                event_type=PRODUCT_TRANSFER_REJECTED,
                source_engine=command.source_engine,
                payload=build_transfer_rejected_payload(command, reason),
                occurred_at=command.issued_at,
            ),
            self._subscribers,
        )
