"""
ChainTrace Context - ActorContext
=================================
Immutable, authenticated caller identity.

The host (API layer, CLI, test harness) builds an ActorContext
from its authenticated session and hands it to every mutating
call. Engines never read a caller identity from a payload field.
"""

from __future__ import annotations

from dataclasses import dataclass

ACTOR_HUMAN = "HUMAN"
ACTOR_SYSTEM = "SYSTEM"

VALID_ACTOR_TYPES = frozenset({ACTOR_HUMAN, ACTOR_SYSTEM})


@dataclass(frozen=True)
class ActorContext:
    """
    actor_id is the caller's network identity, compared byte-exact
    against custodian and participant identities.
    """

    actor_type: str
    actor_id: str

    def __post_init__(self):
        if self.actor_type not in VALID_ACTOR_TYPES:
            raise ValueError(
                f"actor_type {self.actor_type!r} not valid. "
                f"Must be one of: {sorted(VALID_ACTOR_TYPES)}"
            )

        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")

    @classmethod
    def human(cls, identity: str) -> "ActorContext":
        return cls(actor_type=ACTOR_HUMAN, actor_id=identity)

    @classmethod
    def system(cls, identity: str = "chaintrace-system") -> "ActorContext":
        """Host-side registrations and wiring, not a custodian."""
        return cls(actor_type=ACTOR_SYSTEM, actor_id=identity)
