"""
ChainTrace Core Time — Injected Clock
=======================================
Manufacturing and ownership timestamps come from the Clock a service
is built with. Tests pin time with FixedClock.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    def now_utc(self) -> datetime:
        ...  # pragma: no cover


class SystemClock:
    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Stays at one instant until advance() moves it forward."""

    def __init__(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            raise ValueError("FixedClock needs a timezone-aware instant.")
        self._instant = instant

    def now_utc(self) -> datetime:
        return self._instant

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("A clock only moves forward.")
        self._instant += timedelta(seconds=seconds)
