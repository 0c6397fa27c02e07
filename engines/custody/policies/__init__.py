"""
ChainTrace Custody Engine — Policies
======================================
The custody state machine.

Role transition table (proposer → recipient). Closed: every pair
not listed is disallowed.

    Manufacturer → Supplier
    Supplier     → Supplier
    Supplier     → Consumer

Consumers are the end of the chain and never transfer.
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import ReasonCode, RejectionReason
from core.primitives.participant import Role
from engines.custody.commands import PRODUCT_TRANSFER_REQUEST


ALLOWED_TRANSITIONS = frozenset({
    (Role.MANUFACTURER, Role.SUPPLIER),
    (Role.SUPPLIER, Role.SUPPLIER),
    (Role.SUPPLIER, Role.CONSUMER),
})


def is_transition_allowed(from_role: Role, to_role: Role) -> bool:
    return (from_role, to_role) in ALLOWED_TRANSITIONS


def custodian_policy(
    command: Command,
    custodian_lookup=None,
) -> Optional[RejectionReason]:
    """
    Only the product's current custodian may propose a transfer.

    custodian_lookup: (product_id) → current custodian identity.
    """
    if custodian_lookup is None:
        return None

    if command.command_type != PRODUCT_TRANSFER_REQUEST:
        return None

    product_id = command.payload["product_id"]
    custodian = custodian_lookup(product_id)
    if command.actor_id != custodian:
        return RejectionReason(
            code=ReasonCode.NOT_CUSTODIAN,
            message=(
                f"Caller '{command.actor_id}' is not the current "
                f"custodian of product {product_id}."
            ),
            policy_name="custodian_policy",
        )

    return None


def proposer_policy(
    command: Command,
    participant_lookup=None,
) -> Optional[RejectionReason]:
    """
    The proposer must be the caller, and so the current custodian.
    Naming another participant as proposer cannot borrow its role.

    participant_lookup: (participant_id) → ParticipantRecord, raising
    ParticipantNotFound.
    """
    if participant_lookup is None:
        return None

    if command.command_type != PRODUCT_TRANSFER_REQUEST:
        return None

    proposer = participant_lookup(command.payload["proposer_id"])
    if proposer.identity != command.actor_id:
        return RejectionReason(
            code=ReasonCode.IDENTITY_MISMATCH,
            message=(
                f"Caller '{command.actor_id}' is not proposer "
                f"{proposer.participant_id}."
            ),
            policy_name="proposer_policy",
        )

    return None


def role_transition_policy(
    command: Command,
    role_lookup=None,
) -> Optional[RejectionReason]:
    """
    The proposer → recipient role pair must be in the transition table.

    role_lookup: (participant_id) → Role, raising ParticipantNotFound.
    """
    if role_lookup is None:
        return None

    if command.command_type != PRODUCT_TRANSFER_REQUEST:
        return None

    from_role = role_lookup(command.payload["proposer_id"])
    to_role = role_lookup(command.payload["recipient_id"])
    if not is_transition_allowed(from_role, to_role):
        return RejectionReason(
            code=ReasonCode.ROLE_TRANSITION_NOT_ALLOWED,
            message=(
                f"Transfer from {from_role.value} to {to_role.value} "
                f"is not allowed."
            ),
            policy_name="role_transition_policy",
        )

    return None
