"""
Catalog models.
"""

from django.db import models
from django.utils import timezone

from storefront.related_products.mixins import HasRelations


class Product(HasRelations):
    """
    A sellable catalog product.

    ``deleted_at`` marks a soft delete; ``available_on`` null or in the future
    means the product is not visible yet.
    """

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    count_on_hand = models.IntegerField(default=0)
    available_on = models.DateTimeField(null=True, blank=True, db_index=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "Product"
        verbose_name_plural = "Products"

    def __str__(self):
        return self.name

    @property
    def is_available(self):
        return (
            self.deleted_at is None
            and self.available_on is not None
            and self.available_on <= timezone.now()
        )
