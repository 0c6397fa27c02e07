"""
ChainTrace Command Layer — Command Base Contract
==================================================
Every mutation in ChainTrace begins as a Command.

A Command is a frozen, auditable declaration of intent.
It carries the caller identity, the payload and nothing else.

Rules:
- Immutable once created (frozen dataclass)
- No business logic inside
- No store interaction
- command_type must end with '.request'
- command_type follows engine.domain.action.request format

A Command is NOT an event. It is intent awaiting judgment.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from core.context.actor_context import VALID_ACTOR_TYPES, ActorContext


# ══════════════════════════════════════════════════════════════
# CANONICAL COMMAND
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Command:
    """
    Canonical ChainTrace Command — declaration of intent.

    Fields:
        command_id:     Unique identifier (UUID).
        command_type:   Namespaced type ending in '.request'
                        (e.g. 'custody.product.transfer.request').
        actor_type:     HUMAN | SYSTEM.
        actor_id:       Authenticated network identity of the caller.
        payload:        Intent data (dict).
        issued_at:      When the command was issued.
        correlation_id: Groups related commands in a story.
        source_engine:  Engine that originates this command.

    Example:
        Command(
            command_id=uuid.uuid4(),
            command_type="custody.product.transfer.request",
            actor_type="HUMAN",
            actor_id="0xMANUFACTURER",
            payload={"proposer_id": 0, "recipient_id": 1, "product_id": 0},
            issued_at=datetime.now(timezone.utc),
            correlation_id=uuid.uuid4(),
            source_engine="custody",
        )
    """

    command_id: uuid.UUID
    command_type: str
    actor_type: str
    actor_id: str
    payload: dict
    issued_at: datetime
    correlation_id: uuid.UUID
    source_engine: str

    def __post_init__(self):
        # ── command_id must be UUID ───────────────────────────
        if not isinstance(self.command_id, uuid.UUID):
            raise ValueError(
                f"command_id must be UUID, got {type(self.command_id).__name__}"
            )

        # ── command_type must end with .request ───────────────
        if not self.command_type or not isinstance(self.command_type, str):
            raise ValueError("command_type must be a non-empty string.")

        if not self.command_type.endswith(".request"):
            raise ValueError(
                f"command_type '{self.command_type}' must end with "
                f"'.request' (e.g. 'custody.product.transfer.request')."
            )

        # ── command_type minimum 4 segments ───────────────────
        parts = self.command_type.split(".")
        if len(parts) < 4:
            raise ValueError(
                f"command_type '{self.command_type}' must follow "
                f"engine.domain.action.request format (minimum 4 segments)."
            )

        # ── source_engine must match first segment ────────────
        if parts[0] != self.source_engine:
            raise ValueError(
                f"command_type namespace '{parts[0]}' does not match "
                f"source_engine '{self.source_engine}'."
            )

        # ── actor_type must be valid ──────────────────────────
        if self.actor_type not in VALID_ACTOR_TYPES:
            raise ValueError(
                f"actor_type '{self.actor_type}' not valid. "
                f"Must be one of: {sorted(VALID_ACTOR_TYPES)}"
            )

        # ── actor_id must be non-empty ────────────────────────
        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")

        # ── payload must be dict ──────────────────────────────
        if not isinstance(self.payload, dict):
            raise TypeError("payload must be a dict.")

        # ── correlation_id must be UUID ───────────────────────
        if not isinstance(self.correlation_id, uuid.UUID):
            raise ValueError("correlation_id must be UUID.")

    @classmethod
    def issue(
        cls,
        *,
        command_type: str,
        actor: ActorContext,
        payload: dict,
        issued_at: datetime,
        correlation_id: uuid.UUID | None = None,
    ) -> "Command":
        """Build a command attributed to an authenticated actor."""
        return cls(
            command_id=uuid.uuid4(),
            command_type=command_type,
            actor_type=actor.actor_type,
            actor_id=actor.actor_id,
            payload=payload,
            issued_at=issued_at,
            correlation_id=correlation_id or uuid.uuid4(),
            source_engine=derive_source_engine(command_type),
        )


# ══════════════════════════════════════════════════════════════
# EVENT NAMING LAW (derivation helpers)
# ══════════════════════════════════════════════════════════════

def derive_rejection_event_type(command_type: str) -> str:
    """
    Derive rejected event type from command type.

    custody.product.transfer.request → custody.product.transfer.rejected

    Rule: Strip '.request', append '.rejected'.
    """
    if not command_type.endswith(".request"):
        raise ValueError(
            f"Cannot derive rejection event type from "
            f"'{command_type}' — must end with '.request'."
        )

    base = command_type[: -len(".request")]
    return f"{base}.rejected"


def derive_source_engine(command_type: str) -> str:
    """
    Extract source engine from command type.

    custody.product.transfer.request → custody
    """
    return command_type.split(".")[0]
