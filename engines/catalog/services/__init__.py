"""
ChainTrace Catalog Engine — Application Service
=================================================
Product Catalog: manufacturer-only creation, lookup by id.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Optional

from core.commands.dispatcher import CommandDispatcher
from core.commands.validator import CommandValidationError
from core.context.actor_context import ActorContext
from core.errors import ProductNotFound, Unauthorized
from core.events import DomainEvent, SubscriberRegistry, dispatch
from core.primitives.product import ProductRecord
from core.store.protocol import SupplyChainStore
from core.time.clock import Clock, SystemClock
from engines.catalog.commands import ProductCreateRequest
from engines.catalog.events import (
    build_product_created_payload,
    resolve_catalog_event_type,
)
from engines.catalog.policies import caller_identity_policy, manufacturer_role_policy
from engines.participants.services import ParticipantService

logger = logging.getLogger("chaintrace.catalog")


class CatalogService:
    """Product Catalog application service."""

    def __init__(
        self,
        *,
        store: SupplyChainStore,
        dispatcher: CommandDispatcher,
        participants: ParticipantService,
        clock: Optional[Clock] = None,
        subscribers: Optional[SubscriberRegistry] = None,
    ):
        self._store = store
        self._dispatcher = dispatcher
        self._participants = participants
        self._clock = clock or SystemClock()
        self._subscribers = subscribers

        self._register_policies()

    def _register_policies(self) -> None:
        lookup = self._participants.get_record
        self._dispatcher.register_policy(
            partial(manufacturer_role_policy, participant_lookup=lookup)
        )
        self._dispatcher.register_policy(
            partial(caller_identity_policy, participant_lookup=lookup)
        )

    def create(
        self,
        custodian_participant_id: int,
        model_number: str,
        part_number: str,
        serial_number: str,
        cost: int,
        *,
        actor: ActorContext,
    ) -> int:
        """
        Create a product owned by a Manufacturer and return its id.

        Raises:
            ParticipantNotFound: unknown custodian participant
            Unauthorized:        not a Manufacturer, or caller is not it
        """
        request = ProductCreateRequest(
            custodian_participant_id=custodian_participant_id,
            model_number=model_number,
            part_number=part_number,
            serial_number=serial_number,
            cost=cost,
        )
        command = request.to_command(actor=actor, issued_at=self._clock.now_utc())

        outcome = self._dispatcher.dispatch(command)
        if outcome.is_unauthorized:
            raise Unauthorized(outcome.reason.code, outcome.reason.message)
        if outcome.is_rejected:
            raise CommandValidationError(outcome.reason.code, outcome.reason.message)

        manufacturer = self._participants.get_record(custodian_participant_id)
        record = self._store.add_product(
            model_number=request.model_number,
            part_number=request.part_number,
            serial_number=request.serial_number,
            custodian=manufacturer.identity,
            cost=request.cost,
            manufactured_at=command.issued_at,
        )
        logger.info(
            f"Product {record.product_id} created by "
            f"{manufacturer.identity} (serial {record.serial_number})"
        )

        dispatch(
            DomainEvent(
                event_type=resolve_catalog_event_type(command.command_type),
                source_engine=command.source_engine,
                payload=build_product_created_payload(command, record),
                occurred_at=command.issued_at,
            ),
            self._subscribers,
        )
        return record.product_id

    def get(self, product_id: int) -> ProductRecord:
        record = self._store.get_product(product_id)
        if record is None:
            raise ProductNotFound(product_id)
        return record
