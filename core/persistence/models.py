"""
ChainTrace Persistence — Supply Chain Models
==============================================
Rows behind the SupplyChainStore protocol.

RULES (NON-NEGOTIABLE):
- Primary keys are issued by the Sequence table, never by the database
- OwnershipRecord and ProvenanceEntry are insert-only
- A provenance position is unique per product and positions are
  contiguous from 0
- An ownership record appears in at most one provenance entry

This file contains NO business logic.
"""

from django.db import models


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class ParticipantRole(models.TextChoices):
    MANUFACTURER = "Manufacturer", "Manufacturer"
    SUPPLIER = "Supplier", "Supplier"
    CONSUMER = "Consumer", "Consumer"


# ══════════════════════════════════════════════════════════════
# KEYED RECORDS
# ══════════════════════════════════════════════════════════════

class Participant(models.Model):
    participant_id = models.BigIntegerField(primary_key=True)
    username = models.CharField(max_length=255)
    credential = models.CharField(
        max_length=255,
        help_text="Stored in cleartext. Known limitation.",
    )
    role = models.CharField(max_length=20, choices=ParticipantRole.choices)
    identity = models.CharField(
        max_length=255,
        help_text="Network identity compared against custodians.",
    )

    class Meta:
        db_table = "chaintrace_participants"
        ordering = ["participant_id"]

    def __str__(self):
        return f"{self.participant_id}:{self.username} ({self.role})"


class Product(models.Model):
    product_id = models.BigIntegerField(primary_key=True)
    model_number = models.CharField(max_length=255)
    part_number = models.CharField(max_length=255)
    serial_number = models.CharField(max_length=255)
    custodian = models.CharField(
        max_length=255,
        help_text=(
            "Identity of the creating manufacturer. Written once. "
            "Current custody is derived from provenance entries."
        ),
    )
    cost = models.BigIntegerField(help_text="Manufacturing cost in minor units.")
    manufactured_at = models.DateTimeField()

    class Meta:
        db_table = "chaintrace_products"
        ordering = ["product_id"]

    def __str__(self):
        return f"{self.product_id}:{self.serial_number}"


# ══════════════════════════════════════════════════════════════
# OWNERSHIP HISTORY (insert-only)
# ══════════════════════════════════════════════════════════════

class _InsertOnlyModel(models.Model):

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        """GUARD: INSERT only. Ownership history is never rewritten."""
        if not self._state.adding:
            raise PermissionError(
                f"{type(self).__name__} rows are immutable. "
                f"Cannot update a persisted row."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """GUARD: ownership history is NEVER deleted."""
        raise PermissionError(
            f"{type(self).__name__} rows are NEVER deleted."
        )


class OwnershipRecord(_InsertOnlyModel):
    event_id = models.BigIntegerField(primary_key=True)
    product = models.ForeignKey(
        Product,
        db_column="product_id",
        on_delete=models.PROTECT,
        related_name="ownership_records",
    )
    custodian = models.CharField(max_length=255)
    recorded_at = models.DateTimeField()

    class Meta:
        db_table = "chaintrace_ownership_records"
        ordering = ["event_id"]
        indexes = [
            models.Index(fields=["product", "event_id"], name="idx_own_product_event"),
        ]

    def __str__(self):
        return f"{self.event_id}: product {self.product_id} → {self.custodian}"


class ProvenanceEntry(_InsertOnlyModel):
    product = models.ForeignKey(
        Product,
        db_column="product_id",
        on_delete=models.PROTECT,
        related_name="provenance_entries",
    )
    position = models.PositiveIntegerField()
    record = models.OneToOneField(
        OwnershipRecord,
        db_column="event_id",
        on_delete=models.PROTECT,
        related_name="provenance_entry",
    )

    class Meta:
        db_table = "chaintrace_provenance_entries"
        ordering = ["product", "position"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "position"],
                name="uniq_provenance_product_position",
            ),
        ]

    def __str__(self):
        return f"product {self.product_id}[{self.position}] = {self.record_id}"


# ══════════════════════════════════════════════════════════════
# SEQUENCE COUNTERS
# ══════════════════════════════════════════════════════════════

class Sequence(models.Model):
    name = models.CharField(max_length=32, primary_key=True)
    next_value = models.BigIntegerField(default=0)

    class Meta:
        db_table = "chaintrace_sequences"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} → {self.next_value}"
