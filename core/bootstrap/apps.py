"""
ChainTrace Bootstrap — App Configuration
==========================================
Runs the ledger self-check once Django has loaded, but only when
the Django store backend is configured. A memory-backed process has
no tables to check.

Skipped under pytest and for manage.py commands that run before the
tables exist or only inspect them.
"""

import logging
import sys

from django.apps import AppConfig

logger = logging.getLogger("chaintrace.bootstrap")

SKIP_COMMANDS = frozenset({"migrate", "makemigrations", "showmigrations", "sqlmigrate"})


def should_self_check(argv, backend: str) -> bool:
    if backend != "django":
        return False
    return not (len(argv) > 1 and argv[1] in SKIP_COMMANDS)


class BootstrapConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.bootstrap"
    label = "bootstrap"
    verbose_name = "ChainTrace Bootstrap"

    def ready(self):
        from core.bootstrap.wiring import configured_backend

        backend = configured_backend()
        if "pytest" in sys.modules or not should_self_check(sys.argv, backend):
            logger.info(f"Bootstrap self-check skipped (backend={backend}).")
            return

        from core.bootstrap.self_check import run_bootstrap_checks
        run_bootstrap_checks()
