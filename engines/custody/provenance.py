"""
ChainTrace Custody Engine — Provenance Index
==============================================
Per-product ordered list of ownership-event ids, oldest first.

The index is the single source of truth for current custody:
the custodian of the latest event in the trail, or the product's
creation custodian while the trail is empty.

Rules:
- A trail grows by exactly one id per committed transfer
- A trail never shrinks or reorders
- Every id in a trail exists in the ledger and references the
  same product
- An event id appears in at most one trail, at most once
"""

from __future__ import annotations

import logging
from typing import Optional

from core.errors import OwnershipEventNotFound, ProductNotFound
from core.primitives.ownership import OwnershipEvent
from core.store.protocol import SupplyChainStore

logger = logging.getLogger("chaintrace.custody")


class ProvenanceIndex:
    """Read side of custody, plus the trail append primitive."""

    def __init__(self, store: SupplyChainStore):
        self._store = store

    def _require_product(self, product_id: int):
        product = self._store.get_product(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product

    # ══════════════════════════════════════════════════════════
    # WRITE
    # ══════════════════════════════════════════════════════════

    def record_transfer(self, product_id: int, event_id: int) -> None:
        """
        Append a ledger event id to the product's trail.

        Raises:
            ProductNotFound: product was never created
            ValueError:      event missing from the ledger, referencing
                             another product, or already in a trail
        """
        self._require_product(product_id)

        with self._store.custody_scope(product_id):
            event = self._store.get_ownership_event(event_id)
            if event is None:
                raise ValueError(
                    f"Ownership event {event_id} does not exist in the ledger."
                )
            if event.product_id != product_id:
                raise ValueError(
                    f"Ownership event {event_id} references product "
                    f"{event.product_id}, not {product_id}."
                )
            if self._store.is_event_in_any_trail(event_id):
                raise ValueError(
                    f"Ownership event {event_id} is already recorded."
                )
            self._store.append_trail_entry(product_id, event_id)

        logger.debug(f"Trail of product {product_id} extended with {event_id}")

    # ══════════════════════════════════════════════════════════
    # READ
    # ══════════════════════════════════════════════════════════

    def get_trail(self, product_id: int) -> tuple[int, ...]:
        """Empty tuple for a product with no transfers."""
        return self._store.get_trail(product_id)

    def get_event(self, event_id: int) -> OwnershipEvent:
        event = self._store.get_ownership_event(event_id)
        if event is None:
            raise OwnershipEventNotFound(event_id)
        return event

    def get_history(self, product_id: int) -> tuple[OwnershipEvent, ...]:
        return tuple(self.get_event(eid) for eid in self.get_trail(product_id))

    def latest_event(self, product_id: int) -> Optional[OwnershipEvent]:
        trail = self.get_trail(product_id)
        if not trail:
            return None
        return self.get_event(trail[-1])

    def current_custodian(self, product_id: int) -> str:
        """
        Raises:
            ProductNotFound: product was never created
        """
        product = self._require_product(product_id)
        latest = self.latest_event(product_id)
        if latest is None:
            return product.custodian
        return latest.custodian
