"""
ChainTrace Bootstrap — Start-up Self-Defense and Wiring
=========================================================
Ensures ChainTrace never starts on a corrupted ledger, and
assembles the services that share one store.
"""

from core.bootstrap.errors import SystemBootstrapError
from core.bootstrap.self_check import run_bootstrap_checks
from core.bootstrap.wiring import SupplyChain, build_supply_chain

__all__ = [
    "SystemBootstrapError",
    "run_bootstrap_checks",
    "SupplyChain",
    "build_supply_chain",
]
