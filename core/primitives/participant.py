"""
ChainTrace Participant Primitive — Manufacturer / Supplier / Consumer
======================================================================
Engine: Core Primitives

A "Participant" is any registered party that can hold custody
of a product. Its role decides which custody transfers it may
initiate or receive.

RULES (NON-NEGOTIABLE):
- Participant records are immutable once registered
- Role is a closed enumeration — text parsing is byte-exact
- Duplicate usernames are permitted
- Credentials are stored in cleartext (known limitation)

This file contains NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from core.errors import InvalidRole


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class Role(Enum):
    """Custody role of a participant."""
    MANUFACTURER = "Manufacturer"  # origin of a product
    SUPPLIER = "Supplier"          # intermediary / distribution hub
    CONSUMER = "Consumer"          # end of the chain

    @classmethod
    def parse(cls, value: Union["Role", str]) -> "Role":
        """
        Resolve a Role from an enum member or its exact text value.

        "Manufacturer" → Role.MANUFACTURER
        "manufacturer" → InvalidRole
        """
        if isinstance(value, Role):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        raise InvalidRole(value)


# ══════════════════════════════════════════════════════════════
# PARTICIPANT RECORD (Immutable Snapshot)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ParticipantRecord:
    """
    Registered participant.

    Fields:
        participant_id: Sequential id assigned at registration (from 0).
        username:       Login name (not unique).
        credential:     Cleartext credential.
        role:           MANUFACTURER | SUPPLIER | CONSUMER.
        identity:       Network identity used for custody checks.
    """
    participant_id: int
    username: str
    credential: str
    role: Role
    identity: str

    def __post_init__(self):
        if not isinstance(self.participant_id, int) or self.participant_id < 0:
            raise ValueError("participant_id must be non-negative integer.")
        if not isinstance(self.role, Role):
            raise ValueError("role must be Role enum.")
        if not self.identity or not isinstance(self.identity, str):
            raise ValueError("identity must be non-empty string.")

    def view(self) -> "ParticipantView":
        return ParticipantView(
            username=self.username,
            identity=self.identity,
            role=self.role,
        )

    def to_dict(self) -> dict:
        """Public fields only. The credential never leaves the record."""
        return {
            "participant_id": self.participant_id,
            "username": self.username,
            "role": self.role.value,
            "identity": self.identity,
        }


@dataclass(frozen=True)
class ParticipantView:
    """Public lookup result: (username, identity, role)."""
    username: str
    identity: str
    role: Role

    def __iter__(self):
        return iter((self.username, self.identity, self.role))
