"""
ChainTrace Command Layer — Public API
=======================================
Every mutation begins as a Command.
Every Command produces exactly one Outcome.
"""

from core.commands.base import (
    Command,
    derive_rejection_event_type,
    derive_source_engine,
)
from core.commands.outcomes import (
    CommandOutcome,
    CommandStatus,
)
from core.commands.rejection import (
    AUTHORIZATION_CODES,
    ReasonCode,
    RejectionReason,
)
from core.commands.validator import (
    CommandValidationError,
    validate_command,
)
from core.commands.dispatcher import (
    CommandDispatcher,
    PolicyEvaluator,
)

__all__ = [
    # ── Base ──────────────────────────────────────────────────
    "Command",
    "derive_rejection_event_type",
    "derive_source_engine",
    # ── Outcomes ──────────────────────────────────────────────
    "CommandOutcome",
    "CommandStatus",
    # ── Rejection ─────────────────────────────────────────────
    "AUTHORIZATION_CODES",
    "RejectionReason",
    "ReasonCode",
    # ── Validator ─────────────────────────────────────────────
    "CommandValidationError",
    "validate_command",
    # ── Dispatcher ────────────────────────────────────────────
    "CommandDispatcher",
    "PolicyEvaluator",
]
