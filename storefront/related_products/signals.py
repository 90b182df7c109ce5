"""
Signal receivers for the related products app.

- Destroys Relations "from" and "to" a HasRelations record when it is deleted
  (connected per model from RelatedProductsConfig.ready).
- Invalidates the cached RelationType index when a RelationType changes.
"""

from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from storefront.related_products.mixins import HasRelations
from storefront.related_products.models import RelationType
from storefront.related_products.registry import clear_relation_type_cache
from storefront.related_products.services import destroy_relations


def destroy_relations_on_delete(sender, instance, **kwargs):
    """
    Remove every Relation touching a deleted HasRelations record.

    Django sends post_delete inside the deletion transaction, so a failure
    here rolls back the record's delete as well.
    """
    destroy_relations(instance)


def connect_relation_owners(models):
    """
    Connect ``destroy_relations_on_delete`` for each HasRelations model.

    Receivers are bound per sender so deletes of other models keep Django's
    fast delete path.
    """
    for model in models:
        if issubclass(model, HasRelations):
            post_delete.connect(
                destroy_relations_on_delete,
                sender=model,
                dispatch_uid=f"related_products.destroy_relations.{model._meta.label}",
            )


@receiver(pre_save, sender=RelationType)
def clear_previous_relation_type_cache(sender, instance, **kwargs):
    """Clear the index of the class a RelationType is being moved away from."""
    if instance.pk is None:
        return
    previous = (
        RelationType.objects.filter(pk=instance.pk)
        .values_list("applies_to", flat=True)
        .first()
    )
    if previous and previous != instance.applies_to:
        clear_relation_type_cache(previous)


@receiver(post_save, sender=RelationType)
@receiver(post_delete, sender=RelationType)
def clear_relation_type_cache_on_change(sender, instance, **kwargs):
    clear_relation_type_cache(instance.applies_to)
