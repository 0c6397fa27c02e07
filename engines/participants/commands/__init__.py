"""
ChainTrace Participants Engine — Request Commands
===================================================
Typed participant requests that convert into canonical Command objects.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from core.commands.base import Command
from core.context.actor_context import ActorContext
from core.primitives.participant import Role


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

PARTICIPANT_REGISTER_REQUEST = "participants.participant.register.request"

PARTICIPANT_COMMAND_TYPES = frozenset({
    PARTICIPANT_REGISTER_REQUEST,
})


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ParticipantRegisterRequest:
    """
    Request to register a participant.

    role accepts a Role or its exact text ("Manufacturer",
    "Supplier", "Consumer"). Any other text raises InvalidRole.
    """
    username: str
    credential: str
    role: Union[Role, str]
    identity: str

    def __post_init__(self):
        if not self.username or not isinstance(self.username, str):
            raise ValueError("username must be non-empty.")
        if not self.credential or not isinstance(self.credential, str):
            raise ValueError("credential must be non-empty.")
        if not self.identity or not isinstance(self.identity, str):
            raise ValueError("identity must be non-empty.")
        object.__setattr__(self, "role", Role.parse(self.role))

    def to_command(
        self,
        *,
        actor: ActorContext,
        issued_at: datetime,
        correlation_id: Optional[uuid.UUID] = None,
    ) -> Command:
        return Command.issue(
            command_type=PARTICIPANT_REGISTER_REQUEST,
            actor=actor,
            payload={
                "username": self.username,
                "credential": self.credential,
                "role": self.role.value,
                "identity": self.identity,
            },
            issued_at=issued_at,
            correlation_id=correlation_id,
        )
