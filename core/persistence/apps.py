"""
ChainTrace Core — Persistence App Configuration
=================================================
Durable home of the four keyed stores and their sequence counters.

This app:
- Persists participants, products, ownership records and
  provenance entries
- Refuses updates and deletes of ownership history

This app does NOT:
- Decide custody (that is engines.custody)
- Publish events (that is core.events)
"""

from django.apps import AppConfig


class PersistenceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.persistence"
    label = "persistence"
    verbose_name = "ChainTrace Persistence"
