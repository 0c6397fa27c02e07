"""
ChainTrace Store — Public API
===============================
Backend protocol and the in-memory backend.
The Django backend lives in core.persistence.
"""

from core.store.memory import InMemorySupplyChainStore
from core.store.protocol import SupplyChainStore

__all__ = [
    "SupplyChainStore",
    "InMemorySupplyChainStore",
]
