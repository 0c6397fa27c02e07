"""
ChainTrace Custody Engine — Event Types and Payload Builders
==============================================================
A transferred event is published only after the ledger and the
provenance trail have both committed. A rejected proposal publishes
its rejection event and writes nothing.
"""

from __future__ import annotations

from core.commands.base import Command, derive_rejection_event_type
from core.commands.rejection import RejectionReason
from core.primitives.ownership import OwnershipEvent
from engines.custody.commands import PRODUCT_TRANSFER_REQUEST


PRODUCT_TRANSFERRED_V1 = "custody.product.transferred.v1"
PRODUCT_TRANSFER_REJECTED = derive_rejection_event_type(PRODUCT_TRANSFER_REQUEST)

CUSTODY_EVENT_TYPES = (
    PRODUCT_TRANSFERRED_V1,
    PRODUCT_TRANSFER_REJECTED,
)

COMMAND_TO_EVENT_TYPE = {
    PRODUCT_TRANSFER_REQUEST: PRODUCT_TRANSFERRED_V1,
}


def resolve_custody_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def _base_payload(command: Command) -> dict:
    return {
        "actor_id": command.actor_id,
        "correlation_id": str(command.correlation_id),
        "command_id": str(command.command_id),
        "proposer_id": command.payload["proposer_id"],
        "recipient_id": command.payload["recipient_id"],
        "product_id": command.payload["product_id"],
    }


def build_product_transferred_payload(
    command: Command,
    event: OwnershipEvent,
    trail_length: int,
) -> dict:
    payload = _base_payload(command)
    payload.update({
        "event_id": event.event_id,
        "custodian": event.custodian,
        "recorded_at": event.recorded_at.isoformat(),
        "trail_length": trail_length,
    })
    return payload


def build_transfer_rejected_payload(
    command: Command,
    reason: RejectionReason,
) -> dict:
    payload = _base_payload(command)
    payload["reason"] = reason.to_dict()
    return payload
