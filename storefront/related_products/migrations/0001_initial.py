# Generated manually for the related products tables

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("contenttypes", "0002_remove_content_type_name"),
    ]

    operations = [
        migrations.CreateModel(
            name="RelationType",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        help_text="Human label, e.g. 'Related Products' or 'Upsells'",
                        max_length=255,
                    ),
                ),
                ("description", models.TextField(blank=True)),
                (
                    "applies_to",
                    models.CharField(
                        db_index=True,
                        help_text="Model label of the owning class, e.g. 'catalog.Product'",
                        max_length=255,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Relation Type",
                "verbose_name_plural": "Relation Types",
                "ordering": ["name"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("applies_to", "name"),
                        name="unique_relation_type_name_per_model",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Relation",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("relatable_id", models.PositiveBigIntegerField()),
                ("related_to_id", models.PositiveBigIntegerField()),
                ("position", models.IntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "relation_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="relations",
                        to="related_products.relationtype",
                    ),
                ),
                (
                    "relatable_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="contenttypes.contenttype",
                    ),
                ),
                (
                    "related_to_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="contenttypes.contenttype",
                    ),
                ),
            ],
            options={
                "verbose_name": "Relation",
                "verbose_name_plural": "Relations",
                "ordering": ["position", "id"],
                "indexes": [
                    models.Index(
                        fields=[
                            "relatable_type",
                            "relatable_id",
                            "relation_type",
                            "position",
                        ],
                        name="relation_owner_type_pos_idx",
                    ),
                    models.Index(
                        fields=["related_to_type", "related_to_id"],
                        name="relation_target_idx",
                    ),
                ],
            },
        ),
    ]
