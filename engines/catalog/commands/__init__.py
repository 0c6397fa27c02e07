"""
ChainTrace Catalog Engine — Request Commands
==============================================
Typed product requests that convert into canonical Command objects.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.commands.base import Command
from core.context.actor_context import ActorContext


PRODUCT_CREATE_REQUEST = "catalog.product.create.request"

CATALOG_COMMAND_TYPES = frozenset({
    PRODUCT_CREATE_REQUEST,
})


@dataclass(frozen=True)
class ProductCreateRequest:
    """Request to create a product on behalf of a manufacturer."""
    custodian_participant_id: int
    model_number: str
    part_number: str
    serial_number: str
    cost: int

    def __post_init__(self):
        if (
            not isinstance(self.custodian_participant_id, int)
            or isinstance(self.custodian_participant_id, bool)
        ):
            raise ValueError("custodian_participant_id must be an integer.")
        for name in ("model_number", "part_number", "serial_number"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string.")
        if not isinstance(self.cost, int) or isinstance(self.cost, bool):
            raise ValueError("cost must be integer (minor units).")
        if self.cost < 0:
            raise ValueError("cost must not be negative.")

    def to_command(
        self,
        *,
        actor: ActorContext,
        issued_at: datetime,
        correlation_id: Optional[uuid.UUID] = None,
    ) -> Command:
        return Command.issue(
            command_type=PRODUCT_CREATE_REQUEST,
            actor=actor,
            payload={
                "custodian_participant_id": self.custodian_participant_id,
                "model_number": self.model_number,
                "part_number": self.part_number,
                "serial_number": self.serial_number,
                "cost": self.cost,
            },
            issued_at=issued_at,
            correlation_id=correlation_id,
        )
