"""
HasRelations capability for models that own product relations.

A host model opts in by inheriting from HasRelations:

    class Product(HasRelations):
        ...

        @classmethod
        def relation_filter(cls):
            # Only return products with at least two items in stock
            return super().relation_filter().narrow(count_on_hand__gte=2)

Related records are then fetched through the explicit accessor API:

    product.get_related("upsells")          # queryset, or None if no such type
    product.has_related_products("upsells") # bool, never fetches
"""

from typing import Optional

from django.contrib.contenttypes.fields import GenericRelation
from django.db import models

from storefront.related_products.exceptions import RelationTypeNotFound
from storefront.related_products.filters import default_relation_filter
from storefront.related_products.models import RelationType
from storefront.related_products.registry import (
    RelationTypeRegistry,
    applicable_relation_types,
)
from storefront.related_products.services import RelatedProductsResolver


class HasRelations(models.Model):
    """
    Abstract model for records that own Relations to records of their class.

    Outgoing Relations are removed by Django's cascade through ``relations``;
    incoming ones by the post_delete receiver in ``signals``.
    """

    relations = GenericRelation(
        "related_products.Relation",
        content_type_field="relatable_type",
        object_id_field="relatable_id",
    )

    class Meta:
        abstract = True

    @classmethod
    def applicable_relation_types(cls):
        """Returns all the RelationTypes which apply to this class."""
        return applicable_relation_types(cls)

    @classmethod
    def relation_registry(cls) -> RelationTypeRegistry:
        return RelationTypeRegistry(cls)

    @classmethod
    def relation_filter(cls):
        """
        The filter used to narrow related records for this class.

        By default this removes records which are deleted or not yet
        available. Override to fine tune it; returning None disables
        filtering.
        """
        return default_relation_filter()

    def get_relation_filter(self):
        """
        Instance-level filter hook, layered on top of ``relation_filter``.

        Could be overridden to filter relative to this record (eg. only
        higher priced items).
        """
        return type(self).relation_filter()

    def relation_types_in_use(self):
        """Distinct RelationTypes of this record's outgoing relations."""
        return RelationType.objects.filter(
            pk__in=self.relations.values("relation_type")
        )

    def lookup_relation_type(self, name) -> Optional[RelationType]:
        return self.relation_registry().lookup(name)

    def has_related_products(self, name) -> bool:
        """True if a RelationType applicable to this class is reached by ``name``."""
        return self.lookup_relation_type(name) is not None

    def get_related(self, name, relation_filter=None):
        """
        Related records for the RelationType reached by ``name``.

        Returns None when no RelationType matches, otherwise a queryset in
        Relation position order (possibly empty).
        """
        relation_type = self.lookup_relation_type(name)
        if relation_type is None:
            return None
        return self.related_for_relation_type(relation_type, relation_filter)

    def require_related(self, name, relation_filter=None):
        """Like ``get_related`` but raises RelationTypeNotFound when unmatched."""
        relation_type = self.lookup_relation_type(name)
        if relation_type is None:
            raise RelationTypeNotFound(name, self._meta.label)
        return self.related_for_relation_type(relation_type, relation_filter)

    def related_for_relation_type(self, relation_type, relation_filter=None):
        return RelatedProductsResolver(self, relation_filter).resolve(relation_type)
