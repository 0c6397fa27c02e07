"""
ChainTrace Custody Engine — Request Commands
==============================================
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.commands.base import Command
from core.context.actor_context import ActorContext


PRODUCT_TRANSFER_REQUEST = "custody.product.transfer.request"

CUSTODY_COMMAND_TYPES = frozenset({
    PRODUCT_TRANSFER_REQUEST,
})


def _require_id(name: str, value) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an integer.")


@dataclass(frozen=True)
class TransferProposalRequest:
    """
    Proposal to move custody of a product from proposer to recipient.

    The caller identity comes from the ActorContext, never from
    these fields.
    """
    proposer_id: int
    recipient_id: int
    product_id: int

    def __post_init__(self):
        _require_id("proposer_id", self.proposer_id)
        _require_id("recipient_id", self.recipient_id)
        _require_id("product_id", self.product_id)

    def to_command(
        self,
        *,
        actor: ActorContext,
        issued_at: datetime,
        correlation_id: Optional[uuid.UUID] = None,
    ) -> Command:
        return Command.issue(
            command_type=PRODUCT_TRANSFER_REQUEST,
            actor=actor,
            payload={
                "proposer_id": self.proposer_id,
                "recipient_id": self.recipient_id,
                "product_id": self.product_id,
            },
            issued_at=issued_at,
            correlation_id=correlation_id,
        )
