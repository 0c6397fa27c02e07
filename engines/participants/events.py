"""
ChainTrace Participants Engine — Event Types and Payload Builders
==================================================================
Events are published AFTER the store commit. The credential never
appears in an event payload.
"""

from __future__ import annotations

from core.commands.base import Command
from core.primitives.participant import ParticipantRecord


PARTICIPANT_REGISTERED_V1 = "participants.participant.registered.v1"

PARTICIPANT_EVENT_TYPES = (
    PARTICIPANT_REGISTERED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "participants.participant.register.request": PARTICIPANT_REGISTERED_V1,
}


def resolve_participant_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def build_participant_registered_payload(
    command: Command,
    record: ParticipantRecord,
) -> dict:
    payload = {
        "actor_id": command.actor_id,
        "actor_type": command.actor_type,
        "correlation_id": str(command.correlation_id),
        "command_id": str(command.command_id),
        "registered_at": command.issued_at.isoformat(),
    }
    payload.update(record.to_dict())
    return payload
