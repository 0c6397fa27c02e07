"""
ChainTrace Command Layer — Rejection Model
============================================
Structured rejection reasons for denied commands.

This is NOT an event. It is an explanation structure the
engine service maps to its public result:

- authorization codes  → Unauthorized raised
- ROLE_TRANSITION_NOT_ALLOWED → False returned

Every rejection must be:
- Deterministic (same input → same rejection)
- Auditable (code + message + policy)
- Machine-readable (reason_code)
- Human-readable (message)
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for command rejection.

    Fields:
        code:        Machine-readable rejection code (e.g. 'NOT_CUSTODIAN').
        message:     Human-readable explanation.
        policy_name: Name of the policy that caused rejection.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes. Extensible by engines.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Command structure ─────────────────────────────────────
    INVALID_COMMAND_STRUCTURE = "INVALID_COMMAND_STRUCTURE"
    INVALID_COMMAND_TYPE = "INVALID_COMMAND_TYPE"
    INVALID_NAMESPACE = "INVALID_NAMESPACE"

    # ── Actor ─────────────────────────────────────────────────
    INVALID_ACTOR = "INVALID_ACTOR"
    IDENTITY_MISMATCH = "IDENTITY_MISMATCH"

    # ── Authorization ─────────────────────────────────────────
    NOT_CUSTODIAN = "NOT_CUSTODIAN"
    ROLE_NOT_MANUFACTURER = "ROLE_NOT_MANUFACTURER"

    # ── Custody state machine ─────────────────────────────────
    ROLE_TRANSITION_NOT_ALLOWED = "ROLE_TRANSITION_NOT_ALLOWED"


AUTHORIZATION_CODES = frozenset({
    ReasonCode.IDENTITY_MISMATCH,
    ReasonCode.NOT_CUSTODIAN,
    ReasonCode.ROLE_NOT_MANUFACTURER,
})
