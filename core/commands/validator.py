"""
ChainTrace Command Layer — Command Validator
==============================================
Validates command structure before any policy runs.

This validator does NOT:
- Touch the store
- Evaluate custody policies
- Emit anything

It only checks:
- command is a Command
- actor_type is valid and actor_id present
- command_type format is correct (engine.domain.action.request)
- namespace matches source_engine
- payload is a dict

If invalid → CommandValidationError (structured, auditable).
"""

from __future__ import annotations

from core.commands.base import Command
from core.commands.rejection import ReasonCode
from core.context.actor_context import VALID_ACTOR_TYPES


class CommandValidationError(Exception):
    """Structured validation failure for commands."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


def validate_command(command: Command) -> None:
    """
    Validate command structure.

    Raises:
        CommandValidationError: If any check fails.

    Returns:
        None — success is silent. Failure is loud.
    """

    # ── 1. Type check ─────────────────────────────────────────
    if not isinstance(command, Command):
        raise CommandValidationError(
            code=ReasonCode.INVALID_COMMAND_STRUCTURE,
            message=f"Expected Command, got {type(command).__name__}.",
        )

    # ── 2. Actor ──────────────────────────────────────────────
    if command.actor_type not in VALID_ACTOR_TYPES:
        raise CommandValidationError(
            code=ReasonCode.INVALID_ACTOR,
            message=(
                f"actor_type '{command.actor_type}' not valid. "
                f"Must be one of: {sorted(VALID_ACTOR_TYPES)}"
            ),
        )

    if not command.actor_id:
        raise CommandValidationError(
            code=ReasonCode.INVALID_ACTOR,
            message="Commands require an authenticated actor_id.",
        )

    # ── 3. command_type format ────────────────────────────────
    if not command.command_type.endswith(".request"):
        raise CommandValidationError(
            code=ReasonCode.INVALID_COMMAND_TYPE,
            message=(
                f"command_type '{command.command_type}' must end "
                f"with '.request'."
            ),
        )

    parts = command.command_type.split(".")
    if len(parts) < 4:
        raise CommandValidationError(
            code=ReasonCode.INVALID_COMMAND_TYPE,
            message=(
                f"command_type '{command.command_type}' must follow "
                f"engine.domain.action.request format."
            ),
        )

    # ── 4. Namespace: first segment must match source_engine ──
    if parts[0] != command.source_engine:
        raise CommandValidationError(
            code=ReasonCode.INVALID_NAMESPACE,
            message=(
                f"command_type namespace '{parts[0]}' does not match "
                f"source_engine '{command.source_engine}'."
            ),
        )

    # ── 5. Payload ────────────────────────────────────────────
    if not isinstance(command.payload, dict):
        raise CommandValidationError(
            code=ReasonCode.INVALID_COMMAND_STRUCTURE,
            message="payload must be a dict.",
        )
