"""
ChainTrace Bootstrap — Self-Check Orchestrator
================================================
Check order:
1. Persistence tables exist
2. Insert-only guards active
3. Provenance trail integrity
"""

import logging

from core.bootstrap.invariants import (
    check_insert_only_guards,
    check_persistence_tables,
    check_provenance_integrity,
)

logger = logging.getLogger("chaintrace.bootstrap")


def run_bootstrap_checks():
    """
    Execute all ledger invariant checks.
    Called once at startup via AppConfig.ready().
    """
    logger.info("═══ ChainTrace Bootstrap Self-Check Starting ═══")

    check_persistence_tables()
    check_insert_only_guards()
    check_provenance_integrity()

    logger.info("═══ ChainTrace Bootstrap Self-Check PASSED ═══")
