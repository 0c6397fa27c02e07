"""
ChainTrace Bootstrap — Service Wiring
=======================================
Assembles the four services around ONE store, ONE command
dispatcher and ONE clock.

Backend resolution order:
1. explicit `backend` argument
2. settings.CHAINTRACE["STORE_BACKEND"]
3. "memory"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from core.bootstrap.errors import SystemBootstrapError
from core.commands.dispatcher import CommandDispatcher
from core.events import SubscriberRegistry
from core.store import InMemorySupplyChainStore, SupplyChainStore
from core.time.clock import Clock, SystemClock
from engines.catalog.events import CATALOG_EVENT_TYPES
from engines.catalog.services import CatalogService
from engines.custody.events import CUSTODY_EVENT_TYPES
from engines.custody.provenance import ProvenanceIndex
from engines.custody.services import TransferAuthority
from engines.participants.events import PARTICIPANT_EVENT_TYPES
from engines.participants.services import ParticipantService

logger = logging.getLogger("chaintrace.bootstrap")

BACKEND_MEMORY = "memory"
BACKEND_DJANGO = "django"

VALID_BACKENDS = frozenset({BACKEND_MEMORY, BACKEND_DJANGO})

PUBLISHED_EVENT_TYPES = frozenset(
    PARTICIPANT_EVENT_TYPES + CATALOG_EVENT_TYPES + CUSTODY_EVENT_TYPES
)


@dataclass(frozen=True)
class SupplyChain:
    participants: ParticipantService
    catalog: CatalogService
    custody: TransferAuthority
    provenance: ProvenanceIndex
    store: SupplyChainStore
    subscribers: SubscriberRegistry


def configured_backend() -> str:
    from django.conf import settings

    if not settings.configured:
        return BACKEND_MEMORY
    return getattr(settings, "CHAINTRACE", {}).get("STORE_BACKEND", BACKEND_MEMORY)


def _build_store(backend: str) -> SupplyChainStore:
    if backend not in VALID_BACKENDS:
        raise SystemBootstrapError(
            invariant="STORE_BACKEND",
            detail=(
                f"Unknown store backend '{backend}'. "
                f"Must be one of: {sorted(VALID_BACKENDS)}"
            ),
        )

    if backend == BACKEND_DJANGO:
        from core.persistence.store import DjangoSupplyChainStore
        return DjangoSupplyChainStore()
    return InMemorySupplyChainStore()


def build_supply_chain(
    store: Optional[SupplyChainStore] = None,
    clock: Optional[Clock] = None,
    backend: Optional[str] = None,
    subscribers: Optional[SubscriberRegistry] = None,
) -> SupplyChain:
    """
    Build the service bundle.

    An explicit store wins over any backend selection.
    """
    if store is None:
        store = _build_store(backend or configured_backend())
    clock = clock or SystemClock()
    if subscribers is None:
        subscribers = SubscriberRegistry(event_types=PUBLISHED_EVENT_TYPES)
    dispatcher = CommandDispatcher(clock=clock)

    participants = ParticipantService(
        store=store,
        dispatcher=dispatcher,
        clock=clock,
        subscribers=subscribers,
    )
    catalog = CatalogService(
        store=store,
        dispatcher=dispatcher,
        participants=participants,
        clock=clock,
        subscribers=subscribers,
    )
    provenance = ProvenanceIndex(store)
    custody = TransferAuthority(
        store=store,
        dispatcher=dispatcher,
        participants=participants,
        catalog=catalog,
        provenance=provenance,
        clock=clock,
        subscribers=subscribers,
    )

    logger.info(
        f"Supply chain wired on {type(store).__name__} "
        f"({dispatcher.policy_count} policies)"
    )
    return SupplyChain(
        participants=participants,
        catalog=catalog,
        custody=custody,
        provenance=provenance,
        store=store,
        subscribers=subscribers,
    )
