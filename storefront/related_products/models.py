"""
Relation models for associating records with other records.

- RelationType: a named category of relation ("Upsells", "Cross Sells")
  scoped to the model class it applies to.
- Relation: a directed, positioned edge from an owner record to a target
  record, tagged with a RelationType.
"""

from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models


def model_label(model_or_label) -> str:
    """Return the ``app_label.ModelName`` label for a model, instance or label."""
    if isinstance(model_or_label, str):
        return model_or_label
    return model_or_label._meta.label


class RelationTypeQuerySet(models.QuerySet):
    def applicable_to(self, model_or_label):
        """RelationTypes owned by the given model class, ordered by name."""
        return self.filter(applies_to=model_label(model_or_label)).order_by("name")


class RelationType(models.Model):
    """
    A named category of relation between records of one model class.
    """

    name = models.CharField(
        max_length=255,
        help_text="Human label, e.g. 'Related Products' or 'Upsells'",
    )
    description = models.TextField(blank=True)
    applies_to = models.CharField(
        max_length=255,
        db_index=True,
        help_text="Model label of the owning class, e.g. 'catalog.Product'",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RelationTypeQuerySet.as_manager()

    class Meta:
        ordering = ["name"]
        verbose_name = "Relation Type"
        verbose_name_plural = "Relation Types"
        constraints = [
            models.UniqueConstraint(
                fields=["applies_to", "name"],
                name="unique_relation_type_name_per_model",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.applies_to})"


class Relation(models.Model):
    """
    A directed edge from ``relatable`` to ``related_to``.

    ``position`` orders edges sharing the same owner and relation type; it is
    not required to be unique or contiguous.
    """

    relation_type = models.ForeignKey(
        RelationType,
        on_delete=models.CASCADE,
        related_name="relations",
    )

    # Owner of the edge
    relatable_type = models.ForeignKey(
        ContentType,
        on_delete=models.CASCADE,
        related_name="+",
    )
    relatable_id = models.PositiveBigIntegerField()
    relatable = GenericForeignKey("relatable_type", "relatable_id")

    # Target of the edge
    related_to_type = models.ForeignKey(
        ContentType,
        on_delete=models.CASCADE,
        related_name="+",
    )
    related_to_id = models.PositiveBigIntegerField()
    related_to = GenericForeignKey("related_to_type", "related_to_id")

    position = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["position", "id"]
        verbose_name = "Relation"
        verbose_name_plural = "Relations"
        indexes = [
            models.Index(
                fields=["relatable_type", "relatable_id", "relation_type", "position"],
                name="relation_owner_type_pos_idx",
            ),
            models.Index(
                fields=["related_to_type", "related_to_id"],
                name="relation_target_idx",
            ),
        ]

    def __str__(self):
        return (
            f"{self.relation_type.name}: "
            f"{self.relatable_type_id}:{self.relatable_id} -> "
            f"{self.related_to_type_id}:{self.related_to_id} @{self.position}"
        )
