"""
ChainTrace Core — Error Types
===============================
Two failure kinds cross the public surface:

- Unauthorized: the caller may not perform the mutation at all.
- NotFound:     an id that was never assigned.

A disallowed role transition is NOT an error. It is a normal
negative result (False) returned by the Transfer Authority.
"""

from __future__ import annotations


class ChainTraceError(Exception):
    """Base error for all ChainTrace operations."""
    pass


# ══════════════════════════════════════════════════════════════
# AUTHORIZATION
# ══════════════════════════════════════════════════════════════

class Unauthorized(ChainTraceError):
    """Caller lacks authority for the requested mutation."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


# ══════════════════════════════════════════════════════════════
# LOOKUP
# ══════════════════════════════════════════════════════════════

class NotFound(ChainTraceError, LookupError):
    """Referenced id was never assigned."""

    kind = "record"

    def __init__(self, record_id: int):
        self.record_id = record_id
        super().__init__(f"No {self.kind} with id {record_id}.")


class ParticipantNotFound(NotFound):
    kind = "participant"


class ProductNotFound(NotFound):
    kind = "product"


class OwnershipEventNotFound(NotFound):
    kind = "ownership event"


# ══════════════════════════════════════════════════════════════
# MALFORMED INPUT
# ══════════════════════════════════════════════════════════════

class InvalidRole(ChainTraceError, ValueError):
    """Role text is not exactly one of the known role values."""

    def __init__(self, value):
        self.value = value
        super().__init__(
            f"role {value!r} not valid. "
            f"Must be one of: ['Consumer', 'Manufacturer', 'Supplier']"
        )
