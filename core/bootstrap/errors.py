"""
ChainTrace Bootstrap — System Errors
======================================
If a ledger invariant is violated at startup,
the system must refuse to live.
"""


class SystemBootstrapError(Exception):
    """
    Raised when a critical invariant is violated during boot
    or when the configured wiring cannot be built.
    """

    def __init__(self, invariant: str, detail: str):
        self.invariant = invariant
        self.detail = detail
        super().__init__(
            f"CHAINTRACE BOOTSTRAP FAILURE — {invariant}: {detail}"
        )
