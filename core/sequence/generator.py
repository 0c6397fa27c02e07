"""
ChainTrace Sequence — Monotonic Id Generator
==============================================
Process-wide counters for participant, product and ownership ids.

Doctrine:
- Ids start at 0 and increase by exactly 1 per issue.
- No id is ever reused within the lifetime of the counter.
- State is persisted alongside the store it indexes
  (snapshot / restore), never recomputed from data.
- Issuing is atomic (thread-safe).
"""

from __future__ import annotations

import threading
from dataclasses import dataclass


SEQUENCE_PARTICIPANT = "participant"
SEQUENCE_PRODUCT = "product"
SEQUENCE_OWNERSHIP = "ownership"

VALID_SEQUENCES = frozenset({
    SEQUENCE_PARTICIPANT,
    SEQUENCE_PRODUCT,
    SEQUENCE_OWNERSHIP,
})


@dataclass(frozen=True)
class SequenceSnapshot:
    """Persistable counter state: the next id to be issued."""
    name: str
    next_value: int

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise ValueError("name must be non-empty string.")
        if not isinstance(self.next_value, int) or self.next_value < 0:
            raise ValueError("next_value must be non-negative integer.")


class SequenceGenerator:
    """
    Thread-safe monotonic counter.

    Usage:
        seq = SequenceGenerator(SEQUENCE_PRODUCT)
        seq.next()          # 0
        seq.next()          # 1
        seq.snapshot()      # SequenceSnapshot("product", 2)
    """

    def __init__(self, name: str, *, start_at: int = 0):
        if not isinstance(start_at, int) or start_at < 0:
            raise ValueError("start_at must be non-negative integer.")
        self._name = name
        self._next = start_at
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    def next(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def snapshot(self) -> SequenceSnapshot:
        with self._lock:
            return SequenceSnapshot(name=self._name, next_value=self._next)

    @classmethod
    def restore(cls, snapshot: SequenceSnapshot) -> "SequenceGenerator":
        return cls(snapshot.name, start_at=snapshot.next_value)
