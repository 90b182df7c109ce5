"""
Composable filters that narrow related records to the visible ones.

A RelationFilter wraps a ``Q`` object and is applied to the candidate
queryset in SQL, so narrowing it never loads rows into memory.

Usage:
    from storefront.related_products.filters import default_relation_filter

    in_stock = default_relation_filter().narrow(count_on_hand__gte=2)
    in_stock.apply(Product.objects.all())
"""

from django.db.models import Q
from django.utils import timezone


class RelationFilter:
    """
    Immutable predicate over the related model.

    An empty filter matches every record. Composition (``narrow``, ``&``,
    ``|``) always returns a new filter and leaves the operands untouched.
    """

    def __init__(self, q=None):
        self.q = q if q is not None else Q()

    def apply(self, queryset):
        """Intersect ``queryset`` with this filter."""
        return queryset.filter(self.q)

    def narrow(self, *args, **kwargs) -> "RelationFilter":
        """Return a filter that also requires ``Q(*args, **kwargs)``."""
        return RelationFilter(self.q & Q(*args, **kwargs))

    def __and__(self, other) -> "RelationFilter":
        return RelationFilter(self.q & _as_q(other))

    def __or__(self, other) -> "RelationFilter":
        return RelationFilter(self.q | _as_q(other))

    def __eq__(self, other):
        if not isinstance(other, RelationFilter):
            return NotImplemented
        return self.q == other.q

    def __hash__(self):
        return hash(self.q)

    def __repr__(self):
        return f"RelationFilter({self.q!r})"


def _as_q(value) -> Q:
    if isinstance(value, RelationFilter):
        return value.q
    if isinstance(value, Q):
        return value
    raise TypeError(f"Cannot combine RelationFilter with {type(value).__name__}")


def as_relation_filter(value):
    """Coerce a Q or RelationFilter into a RelationFilter; None stays None."""
    if value is None or isinstance(value, RelationFilter):
        return value
    return RelationFilter(_as_q(value))


def default_relation_filter() -> RelationFilter:
    """
    Remove records that are soft-deleted or not yet available.

    ``available_on`` is compared with the time the filter is built.
    """
    return RelationFilter(
        Q(deleted_at__isnull=True)
        & Q(available_on__isnull=False)
        & Q(available_on__lte=timezone.now())
    )
