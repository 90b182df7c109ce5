"""
Related products service.

Resolves the records an owner points to through Relations of one
RelationType, and destroys Relations when an endpoint record goes away.

Usage:
    from storefront.related_products.services import (
        RelatedProductsResolver,
        destroy_relations,
    )

    upsells = RelatedProductsResolver(product).resolve(relation_type)
    destroy_relations(product)
"""

from django.contrib.contenttypes.models import ContentType
from django.db import transaction
from django.db.models import Case, IntegerField, Value, When

from storefront.logging_utils import add_log_context, get_service_logger
from storefront.related_products.filters import (
    as_relation_filter,
    default_relation_filter,
)
from storefront.related_products.models import Relation

logger = get_service_logger("related_products")


def owner_relation_filter(owner):
    """
    Filter hooks of ``owner`` in precedence order: instance, class, default.
    """
    if hasattr(owner, "get_relation_filter"):
        return as_relation_filter(owner.get_relation_filter())
    if hasattr(type(owner), "relation_filter"):
        return as_relation_filter(type(owner).relation_filter())
    return default_relation_filter()


class RelatedProductsResolver:
    """
    Resolve related records for one owner record.

    The filter passed at construction overrides the owner's hooks. When the
    effective filter is None the candidates are returned unfiltered.
    """

    def __init__(self, owner, relation_filter=None):
        self.owner = owner
        self.model = type(owner)
        if relation_filter is not None:
            self.relation_filter = as_relation_filter(relation_filter)
        else:
            self.relation_filter = owner_relation_filter(owner)

    def related_ids(self, relation_type):
        """Target ids of the owner's Relations of this type, in position order."""
        content_type = ContentType.objects.get_for_model(self.owner)
        return list(
            Relation.objects.filter(
                relatable_type=content_type,
                relatable_id=self.owner.pk,
                relation_type=relation_type,
                related_to_type=content_type,
            )
            .order_by("position", "id")
            .values_list("related_to_id", flat=True)
        )

    def resolve(self, relation_type):
        """
        Return the related records as a queryset ordered by Relation position.
        """
        manager = self.model._default_manager

        with add_log_context(
            model=self.model._meta.label,
            product_id=self.owner.pk,
            relation_type=relation_type.name,
            relation_type_id=relation_type.pk,
        ):
            related_ids = self.related_ids(relation_type)
            if not related_ids:
                logger.debug("No relations found")
                return manager.none()

            # Keep the first position of an id listed more than once
            ranks = {}
            for related_id in related_ids:
                ranks.setdefault(related_id, len(ranks))

            queryset = manager.filter(pk__in=list(ranks))
            if self.relation_filter is not None:
                queryset = self.relation_filter.apply(queryset)

            queryset = queryset.annotate(
                relation_rank=Case(
                    *[When(pk=pk, then=Value(rank)) for pk, rank in ranks.items()],
                    output_field=IntegerField(),
                )
            ).order_by("relation_rank")

            logger.debug(
                "Resolved related records",
                extra={"candidate_count": len(ranks)},
            )
            return queryset


def resolve_related(owner, relation_type, relation_filter=None):
    """Shortcut for ``RelatedProductsResolver(owner, relation_filter).resolve``."""
    return RelatedProductsResolver(owner, relation_filter).resolve(relation_type)


def outgoing_relations(record):
    """Relations owned by ``record``."""
    return Relation.objects.filter(
        relatable_type=ContentType.objects.get_for_model(record),
        relatable_id=record.pk,
    )


def incoming_relations(record):
    """Relations pointing at ``record``."""
    return Relation.objects.filter(
        related_to_type=ContentType.objects.get_for_model(record),
        related_to_id=record.pk,
    )


def destroy_relations(record) -> int:
    """
    Delete every Relation "from" and "to" ``record`` in one transaction.

    Returns:
        int: Number of Relation rows deleted
    """
    with transaction.atomic():
        # First the relations "from" this record to others
        outgoing, _ = outgoing_relations(record).delete()
        # Next the relations "to" this record
        incoming, _ = incoming_relations(record).delete()

    deleted = outgoing + incoming
    if deleted:
        logger.info(
            "Destroyed relations",
            extra={
                "model": record._meta.label,
                "product_id": record.pk,
                "deleted_count": deleted,
            },
        )
    return deleted


def prune_orphan_relations(dry_run: bool = False) -> int:
    """
    Delete Relations whose owner or target record no longer exists.

    Args:
        dry_run: Count the orphans without deleting them

    Returns:
        int: Number of orphaned Relations found
    """
    orphan_ids = set()

    for type_field, id_field in (
        ("relatable_type", "relatable_id"),
        ("related_to_type", "related_to_id"),
    ):
        type_ids = (
            Relation.objects.order_by()
            .values_list(type_field, flat=True)
            .distinct()
        )
        for type_id in list(type_ids):
            relations = Relation.objects.filter(**{type_field: type_id})
            model = ContentType.objects.get_for_id(type_id).model_class()
            if model is None:
                # The model itself was removed
                orphan_ids.update(relations.values_list("pk", flat=True))
                continue

            existing = model._base_manager.values("pk")
            orphan_ids.update(
                relations.exclude(**{f"{id_field}__in": existing}).values_list(
                    "pk", flat=True
                )
            )

    if orphan_ids and not dry_run:
        with transaction.atomic():
            Relation.objects.filter(pk__in=orphan_ids).delete()
        logger.info(
            "Pruned orphaned relations", extra={"deleted_count": len(orphan_ids)}
        )

    return len(orphan_ids)
