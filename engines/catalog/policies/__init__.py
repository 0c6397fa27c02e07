"""
ChainTrace Catalog Engine — Policies
======================================
Only a Manufacturer may create products, and only for itself.

participant_lookup: (participant_id) → ParticipantRecord, raising
ParticipantNotFound for unknown ids. Bind it with functools.partial
before registering the policy on a dispatcher.
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import ReasonCode, RejectionReason
from core.primitives.participant import Role
from engines.catalog.commands import PRODUCT_CREATE_REQUEST


def manufacturer_role_policy(
    command: Command,
    participant_lookup=None,
) -> Optional[RejectionReason]:
    """The named custodian must hold exactly the Manufacturer role."""
    if participant_lookup is None:
        return None

    if command.command_type != PRODUCT_CREATE_REQUEST:
        return None

    participant = participant_lookup(command.payload["custodian_participant_id"])
    if participant.role is not Role.MANUFACTURER:
        return RejectionReason(
            code=ReasonCode.ROLE_NOT_MANUFACTURER,
            message=(
                f"Participant {participant.participant_id} is a "
                f"{participant.role.value}. Only a Manufacturer can "
                f"create products."
            ),
            policy_name="manufacturer_role_policy",
        )

    return None


def caller_identity_policy(
    command: Command,
    participant_lookup=None,
) -> Optional[RejectionReason]:
    """The caller must be the manufacturer it names."""
    if participant_lookup is None:
        return None

    if command.command_type != PRODUCT_CREATE_REQUEST:
        return None

    participant = participant_lookup(command.payload["custodian_participant_id"])
    if participant.identity != command.actor_id:
        return RejectionReason(
            code=ReasonCode.IDENTITY_MISMATCH,
            message=(
                f"Caller '{command.actor_id}' is not the identity of "
                f"participant {participant.participant_id}."
            ),
            policy_name="caller_identity_policy",
        )

    return None
