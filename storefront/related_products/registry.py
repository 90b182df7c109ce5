"""
RelationType registry.

Builds, per model class, an explicit index from accessor key to RelationType
so accessors resolve by lookup rather than by intercepting attribute access.

Usage:
    from storefront.related_products.registry import RelationTypeRegistry

    registry = RelationTypeRegistry(Product)
    relation_type = registry.lookup("upsells")  # None when nothing matches
"""

from typing import Dict, Optional

from django.core.cache import cache
from django.db import connections, router, transaction

from storefront.logging_utils import get_logger
from storefront.related_products.conf import get_setting
from storefront.related_products.models import RelationType, model_label
from storefront.related_products.naming import accessor_key, relation_type_key

logger = get_logger(__name__)

CACHE_KEY_PREFIX = "related_products:relation_types"


def get_cache_key(model_or_label) -> str:
    return f"{CACHE_KEY_PREFIX}:{model_label(model_or_label)}"


def _read_database() -> str:
    return router.db_for_read(RelationType)


def clear_relation_type_cache(model_or_label) -> None:
    """
    Clear the cached RelationType index for a model class.

    Called whenever a RelationType is saved or deleted. The key is cleared
    again on commit, after any index write queued earlier in the same
    transaction.
    """
    cache_key = get_cache_key(model_or_label)
    cache.delete(cache_key)
    transaction.on_commit(
        lambda: cache.delete(cache_key), using=router.db_for_write(RelationType)
    )


def relation_storage_ready() -> bool:
    """
    True when the RelationType table exists on the read database.

    The table is missing while migrations have not run yet; callers treat that
    as "no relation types" instead of letting the query fail.
    """
    connection = connections[_read_database()]
    return RelationType._meta.db_table in connection.introspection.table_names()


def applicable_relation_types(model_or_label):
    """All RelationTypes which apply to the given model class, ordered by name."""
    return RelationType.objects.applicable_to(model_or_label)


class RelationTypeRegistry:
    """
    Accessor-key index of the RelationTypes that apply to one model class.
    """

    def __init__(self, model):
        self.model = model
        self.label = model_label(model)

    def relation_types(self):
        return applicable_relation_types(self.label)

    def build_index(self) -> Dict[str, RelationType]:
        index = {}
        for relation_type in self.relation_types():
            # First in name order wins when two names normalize alike
            index.setdefault(relation_type_key(relation_type.name), relation_type)
        return index

    def load(self) -> Optional[Dict[str, RelationType]]:
        """
        Return the accessor-key index, or None if relation storage is missing.
        """
        cache_key = get_cache_key(self.label)
        index = cache.get(cache_key)

        if index is None:
            if not relation_storage_ready():
                logger.warning(
                    "Relation type storage is not provisioned; "
                    "treating %s as having no relation types",
                    self.label,
                    extra={"model": self.label},
                )
                return None

            index = self.build_index()
            timeout = get_setting("RELATED_PRODUCTS_CACHE_TIMEOUT")
            if timeout:
                # Only an index read from committed rows may be shared
                transaction.on_commit(
                    lambda: cache.set(cache_key, index, timeout),
                    using=_read_database(),
                )

        return index

    def lookup(self, name) -> Optional[RelationType]:
        """Return the RelationType reached by ``name``, or None."""
        index = self.load()
        if not index:
            return None
        return index.get(accessor_key(name))

    def __contains__(self, name) -> bool:
        return self.lookup(name) is not None

    def keys(self):
        """Accessor keys available on the model, in RelationType name order."""
        return list((self.load() or {}).keys())
