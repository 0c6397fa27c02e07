"""
ChainTrace Command Layer — Command Dispatcher
===============================================
Accept Command → Validate → Evaluate Policies → Produce Outcome.

The Dispatcher is the DECISION MAKER. It decides ACCEPTED or REJECTED.

The Dispatcher DOES NOT:
- Write to the store
- Execute custody logic
- Raise for a policy rejection

Policy evaluation is pluggable — policies are registered as callables
that return Optional[RejectionReason]. If any policy rejects, the
command is REJECTED with the first rejection reason. Policies filter
on command.command_type themselves.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from core.commands.base import Command
from core.commands.outcomes import CommandOutcome, CommandStatus
from core.commands.rejection import RejectionReason
from core.commands.validator import CommandValidationError, validate_command
from core.time.clock import Clock, SystemClock

logger = logging.getLogger("chaintrace.commands")


# A policy is a callable:
#   (Command) → Optional[RejectionReason]
#   Returns None if policy passes, RejectionReason if it rejects.
# Engines bind their lookups with functools.partial before registering.
PolicyEvaluator = Callable[[Command], Optional[RejectionReason]]


class CommandDispatcher:
    """
    Evaluate a command through validation and policies.

    Usage:
        dispatcher = CommandDispatcher()
        dispatcher.register_policy(custodian_policy)
        dispatcher.register_policy(role_transition_policy)

        outcome = dispatcher.dispatch(command)

    Policies are evaluated in registration order.
    First rejection wins — remaining policies are skipped.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or SystemClock()
        self._policies: List[PolicyEvaluator] = []

    def register_policy(self, policy: PolicyEvaluator) -> None:
        if not callable(policy):
            raise TypeError(
                f"Policy must be callable, got {type(policy).__name__}."
            )
        self._policies.append(policy)

        policy_name = getattr(
            policy, "__qualname__",
            getattr(getattr(policy, "func", None), "__qualname__", str(policy)),
        )
        logger.debug(f"Policy registered: {policy_name}")

    @property
    def policy_count(self) -> int:
        return len(self._policies)

    # ══════════════════════════════════════════════════════════
    # DISPATCH
    # ══════════════════════════════════════════════════════════

    def dispatch(self, command: Command) -> CommandOutcome:
        """
        Evaluate command and produce outcome.

        Flow:
        1. Validate structure → if fails, REJECTED
        2. Evaluate policies → if any rejects, REJECTED
        3. All clear → ACCEPTED

        Lookup errors raised inside a policy (NotFound) propagate.
        """
        now = self._clock.now_utc()

        # ── Step 1: Structural validation ─────────────────────
        try:
            validate_command(command)
        except CommandValidationError as exc:
            if not isinstance(command, Command):
                raise
            logger.info(
                f"Command {command.command_id} validation failed: "
                f"[{exc.code}] {exc.message}"
            )
            return CommandOutcome(
                command_id=command.command_id,
                status=CommandStatus.REJECTED,
                reason=RejectionReason(
                    code=exc.code,
                    message=exc.message,
                    policy_name="command_validator",
                ),
                occurred_at=now,
            )

        # ── Step 2: Policy evaluation ─────────────────────────
        for policy in self._policies:
            rejection = policy(command)
            if rejection is not None:
                if not isinstance(rejection, RejectionReason):
                    raise TypeError(
                        f"Policy must return RejectionReason or None, "
                        f"got {type(rejection).__name__}."
                    )

                logger.info(
                    f"Command {command.command_id} rejected by "
                    f"policy '{rejection.policy_name}': "
                    f"[{rejection.code}] {rejection.message}"
                )
                return CommandOutcome(
                    command_id=command.command_id,
                    status=CommandStatus.REJECTED,
                    reason=rejection,
                    occurred_at=now,
                )

        # ── Step 3: All clear → ACCEPTED ──────────────────────
        logger.info(f"Command {command.command_id} ACCEPTED ({command.command_type})")
        return CommandOutcome(
            command_id=command.command_id,
            status=CommandStatus.ACCEPTED,
            reason=None,
            occurred_at=now,
        )
