"""
ChainTrace – Django Settings (Infrastructure Only)
====================================================
Django serves as the framework container for ChainTrace:
persistence, configuration and logging. It does not dictate
the custody model.

Environment:
    CHAINTRACE_SECRET_KEY     Django secret key
    CHAINTRACE_DEBUG          "1" / "true" enables debug
    CHAINTRACE_STORE_BACKEND  "memory" (default) or "django"
    CHAINTRACE_DB_NAME        SQLite database path
    CHAINTRACE_LOG_LEVEL      level for the chaintrace.* loggers
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get(
    "CHAINTRACE_SECRET_KEY", "chaintrace-dev-key-replace-before-deployment",
)

DEBUG = os.environ.get("CHAINTRACE_DEBUG", "1").lower() in ("1", "true", "yes")

ALLOWED_HOSTS = []

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    # ── ChainTrace Modules ───────────────────────────────
    "core.persistence",
    "core.bootstrap",
]

MIDDLEWARE = []

# ── Database ──────────────────────────────────────────────────
# SQLite for development. The pytest-django test database is
# in-memory.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("CHAINTRACE_DB_NAME", BASE_DIR / "db.sqlite3"),
        "TEST": {"NAME": ":memory:"},
    }
}

# ── ChainTrace ────────────────────────────────────────────────
CHAINTRACE = {
    "STORE_BACKEND": os.environ.get("CHAINTRACE_STORE_BACKEND", "memory"),
}

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "chaintrace": {
            "handlers": ["console"],
            "level": os.environ.get("CHAINTRACE_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

# ── Default Primary Key ──────────────────────────────────────
# ChainTrace issues its own integer keys. This is a Django fallback only.
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
