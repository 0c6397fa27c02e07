"""
ChainTrace Catalog Engine — Event Types and Payload Builders
==============================================================
"""

from __future__ import annotations

from core.commands.base import Command
from core.primitives.product import ProductRecord


PRODUCT_CREATED_V1 = "catalog.product.created.v1"

CATALOG_EVENT_TYPES = (
    PRODUCT_CREATED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "catalog.product.create.request": PRODUCT_CREATED_V1,
}


def resolve_catalog_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def build_product_created_payload(command: Command, record: ProductRecord) -> dict:
    payload = {
        "actor_id": command.actor_id,
        "correlation_id": str(command.correlation_id),
        "command_id": str(command.command_id),
        "custodian_participant_id": command.payload["custodian_participant_id"],
    }
    payload.update(record.to_dict())
    return payload
