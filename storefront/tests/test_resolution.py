"""
Tests for resolving related products through the HasRelations accessors.
"""

from unittest.mock import patch

from django.db.models import Q
from django.test import TestCase

from storefront.catalog.models import Product
from storefront.related_products.exceptions import RelationTypeNotFound
from storefront.related_products.filters import (
    RelationFilter,
    default_relation_filter,
)
from storefront.related_products.services import (
    RelatedProductsResolver,
    resolve_related,
)
from storefront.tests.factories import (
    ProductFactory,
    RelationFactory,
    RelationTypeFactory,
)


class RelatedProductsTest(TestCase):
    def setUp(self):
        self.upsells = RelationTypeFactory(name="Upsells")
        self.a = ProductFactory(name="A")
        self.b = ProductFactory(name="B")
        self.c = ProductFactory(name="C")

    def relate(self, owner, target, position, relation_type=None):
        return RelationFactory(
            relatable=owner,
            related_to=target,
            position=position,
            relation_type=relation_type or self.upsells,
        )

    def test_returns_related_products_in_position_order(self):
        self.relate(self.a, self.b, 2)
        self.relate(self.a, self.c, 1)

        self.assertEqual(list(self.a.get_related("upsells")), [self.c, self.b])

    def test_position_order_wins_over_default_ordering(self):
        z = ProductFactory(name="Z")
        self.relate(self.a, self.b, 3)
        self.relate(self.a, z, 0)
        self.relate(self.a, self.c, 5)

        self.assertEqual(list(self.a.get_related("upsells")), [z, self.b, self.c])

    def test_equal_positions_keep_creation_order(self):
        self.relate(self.a, self.c, 1)
        self.relate(self.a, self.b, 1)

        self.assertEqual(list(self.a.get_related("upsells")), [self.c, self.b])

    def test_repeated_calls_are_identical(self):
        self.relate(self.a, self.b, 2)
        self.relate(self.a, self.c, 1)

        first = list(self.a.get_related("upsells"))
        second = list(self.a.get_related("upsells"))

        self.assertEqual(first, second)

    def test_excludes_invisible_products(self):
        deleted = ProductFactory(deleted=True)
        upcoming = ProductFactory(upcoming=True)
        unavailable = ProductFactory(unavailable=True)
        self.relate(self.a, deleted, 1)
        self.relate(self.a, upcoming, 2)
        self.relate(self.a, unavailable, 3)
        self.relate(self.a, self.b, 4)

        self.assertEqual(list(self.a.get_related("upsells")), [self.b])

    def test_only_the_requested_relation_type(self):
        cross_sells = RelationTypeFactory(name="Cross Sell")
        self.relate(self.a, self.b, 1)
        self.relate(self.a, self.c, 1, relation_type=cross_sells)

        self.assertEqual(list(self.a.get_related("upsells")), [self.b])
        self.assertEqual(list(self.a.get_related("cross_sells")), [self.c])

    def test_only_the_owners_relations(self):
        self.relate(self.b, self.c, 1)

        self.assertEqual(list(self.a.get_related("upsells")), [])

    def test_found_but_empty_returns_empty_queryset(self):
        related = self.a.get_related("upsells")

        self.assertIsNotNone(related)
        self.assertEqual(list(related), [])

    def test_duplicate_targets_appear_once_at_first_position(self):
        self.relate(self.a, self.b, 1)
        self.relate(self.a, self.c, 2)
        self.relate(self.a, self.b, 3)

        self.assertEqual(list(self.a.get_related("upsells")), [self.b, self.c])

    def test_result_stays_composable(self):
        expensive = ProductFactory(price=100)
        self.relate(self.a, expensive, 1)
        self.relate(self.a, self.b, 2)

        related = self.a.get_related("upsells").filter(price__gte=50)

        self.assertEqual(list(related), [expensive])

    def test_unknown_accessor_returns_none(self):
        self.assertIsNone(self.a.get_related("nonexistent"))

    def test_require_related_raises_for_unknown_accessor(self):
        with self.assertRaises(RelationTypeNotFound) as ctx:
            self.a.require_related("nonexistent")

        self.assertEqual(ctx.exception.name, "nonexistent")
        self.assertEqual(ctx.exception.model_label, "catalog.Product")
        self.assertIsInstance(ctx.exception, LookupError)

    def test_require_related_returns_products(self):
        self.relate(self.a, self.b, 1)

        self.assertEqual(list(self.a.require_related("upsells")), [self.b])

    def test_has_related_products(self):
        self.assertTrue(self.a.has_related_products("upsells"))
        self.assertTrue(self.a.has_related_products("Upsells"))
        self.assertFalse(self.a.has_related_products("nonexistent"))

    def test_has_related_products_does_not_fetch(self):
        with self.captureOnCommitCallbacks(execute=True):
            self.a.has_related_products("upsells")

        with self.assertNumQueries(0):
            self.assertTrue(self.a.has_related_products("upsells"))

    def test_relation_types_in_use(self):
        cross_sells = RelationTypeFactory(name="Cross Sell")
        RelationTypeFactory(name="Accessories")
        self.relate(self.a, self.b, 1)
        self.relate(self.a, self.c, 2)
        self.relate(self.a, self.c, 1, relation_type=cross_sells)

        self.assertEqual(
            list(self.a.relation_types_in_use()), [cross_sells, self.upsells]
        )

    def test_resolution_logs_relation_type_and_candidate_count(self):
        self.relate(self.a, self.b, 1)
        self.relate(self.a, ProductFactory(deleted=True), 2)

        with self.assertLogs(
            "storefront.services.related_products", level="DEBUG"
        ) as logs:
            related = list(self.a.get_related("upsells"))

        record = logs.records[-1]
        self.assertEqual(related, [self.b])
        self.assertEqual(record.relation_type_id, self.upsells.pk)
        # Counted before the filter narrows them
        self.assertEqual(record.candidate_count, 2)

    def test_relations_are_ordered_by_position(self):
        second = self.relate(self.a, self.b, 2)
        first = self.relate(self.a, self.c, 1)

        self.assertEqual(list(self.a.relations.all()), [first, second])


class RelationFilterPrecedenceTest(TestCase):
    def setUp(self):
        self.upsells = RelationTypeFactory(name="Upsells")
        self.owner = ProductFactory(price=50)
        self.cheap = ProductFactory(price=10, count_on_hand=1)
        self.pricey = ProductFactory(price=90, count_on_hand=5)
        self.deleted = ProductFactory(deleted=True)
        for position, target in enumerate([self.cheap, self.pricey, self.deleted]):
            RelationFactory(
                relatable=self.owner,
                related_to=target,
                position=position,
                relation_type=self.upsells,
            )

    def test_class_level_override_replaces_the_default(self):
        def in_stock(cls):
            return RelationFilter().narrow(count_on_hand__gte=2)

        with patch.object(Product, "relation_filter", classmethod(in_stock)):
            related = list(self.owner.get_related("upsells"))

        # The deleted product is in stock and the default no longer applies
        self.assertEqual(related, [self.pricey, self.deleted])

    def test_class_override_can_extend_the_default(self):
        def in_stock(cls):
            return default_relation_filter().narrow(count_on_hand__gte=2)

        with patch.object(Product, "relation_filter", classmethod(in_stock)):
            self.assertEqual(list(self.owner.get_related("upsells")), [self.pricey])

    def test_instance_override_layers_on_class_filter(self):
        owner = self.owner
        owner.get_relation_filter = lambda: Product.relation_filter().narrow(
            price__gt=owner.price
        )

        self.assertEqual(list(owner.get_related("upsells")), [self.pricey])

    def test_explicit_filter_wins(self):
        self.owner.get_relation_filter = lambda: RelationFilter().narrow(price__gt=1000)

        related = self.owner.get_related(
            "upsells", relation_filter=RelationFilter().narrow(price__lt=15)
        )

        self.assertEqual(list(related), [self.cheap])

    def test_q_is_accepted_as_explicit_filter(self):
        related = resolve_related(self.owner, self.upsells, Q(price__gte=90))

        self.assertEqual(list(related), [self.pricey])

    def test_hook_returning_none_disables_filtering(self):
        with patch.object(Product, "relation_filter", classmethod(lambda cls: None)):
            related = self.owner.get_related("upsells")

        self.assertEqual(list(related), [self.cheap, self.pricey, self.deleted])

    def test_resolver_uses_owner_hooks_by_default(self):
        resolver = RelatedProductsResolver(self.owner)

        self.assertEqual(list(resolver.resolve(self.upsells)), [self.cheap, self.pricey])
