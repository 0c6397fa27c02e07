"""
ChainTrace Context - Public API
===============================
Authenticated caller identity.
"""

from core.context.actor_context import (
    ACTOR_HUMAN,
    ACTOR_SYSTEM,
    VALID_ACTOR_TYPES,
    ActorContext,
)

__all__ = [
    "ActorContext",
    "ACTOR_HUMAN",
    "ACTOR_SYSTEM",
    "VALID_ACTOR_TYPES",
]
