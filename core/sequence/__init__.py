"""
ChainTrace Sequence — Public API
==================================
"""

from core.sequence.generator import (
    SEQUENCE_OWNERSHIP,
    SEQUENCE_PARTICIPANT,
    SEQUENCE_PRODUCT,
    VALID_SEQUENCES,
    SequenceGenerator,
    SequenceSnapshot,
)

__all__ = [
    "SEQUENCE_PARTICIPANT",
    "SEQUENCE_PRODUCT",
    "SEQUENCE_OWNERSHIP",
    "VALID_SEQUENCES",
    "SequenceGenerator",
    "SequenceSnapshot",
]
