from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Participant",
            fields=[
                ("participant_id", models.BigIntegerField(primary_key=True, serialize=False)),
                ("username", models.CharField(max_length=255)),
                (
                    "credential",
                    models.CharField(
                        help_text="Stored in cleartext. Known limitation.",
                        max_length=255,
                    ),
                ),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("Manufacturer", "Manufacturer"),
                            ("Supplier", "Supplier"),
                            ("Consumer", "Consumer"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "identity",
                    models.CharField(
                        help_text="Network identity compared against custodians.",
                        max_length=255,
                    ),
                ),
            ],
            options={
                "db_table": "chaintrace_participants",
                "ordering": ["participant_id"],
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("product_id", models.BigIntegerField(primary_key=True, serialize=False)),
                ("model_number", models.CharField(max_length=255)),
                ("part_number", models.CharField(max_length=255)),
                ("serial_number", models.CharField(max_length=255)),
                (
                    "custodian",
                    models.CharField(
                        help_text=(
                            "Identity of the creating manufacturer. Written once. "
                            "Current custody is derived from provenance entries."
                        ),
                        max_length=255,
                    ),
                ),
                ("cost", models.BigIntegerField(help_text="Manufacturing cost in minor units.")),
                ("manufactured_at", models.DateTimeField()),
            ],
            options={
                "db_table": "chaintrace_products",
                "ordering": ["product_id"],
            },
        ),
        migrations.CreateModel(
            name="OwnershipRecord",
            fields=[
                ("event_id", models.BigIntegerField(primary_key=True, serialize=False)),
                ("custodian", models.CharField(max_length=255)),
                ("recorded_at", models.DateTimeField()),
                (
                    "product",
                    models.ForeignKey(
                        db_column="product_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="ownership_records",
                        to="persistence.product",
                    ),
                ),
            ],
            options={
                "db_table": "chaintrace_ownership_records",
                "ordering": ["event_id"],
                "indexes": [
                    models.Index(fields=["product", "event_id"], name="idx_own_product_event"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProvenanceEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveIntegerField()),
                (
                    "product",
                    models.ForeignKey(
                        db_column="product_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="provenance_entries",
                        to="persistence.product",
                    ),
                ),
                (
                    "record",
                    models.OneToOneField(
                        db_column="event_id",
                        on_delete=models.deletion.PROTECT,
                        related_name="provenance_entry",
                        to="persistence.ownershiprecord",
                    ),
                ),
            ],
            options={
                "db_table": "chaintrace_provenance_entries",
                "ordering": ["product", "position"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("product", "position"),
                        name="uniq_provenance_product_position",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Sequence",
            fields=[
                ("name", models.CharField(max_length=32, primary_key=True, serialize=False)),
                ("next_value", models.BigIntegerField(default=0)),
            ],
            options={
                "db_table": "chaintrace_sequences",
                "ordering": ["name"],
            },
        ),
    ]
