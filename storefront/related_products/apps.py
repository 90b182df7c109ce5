"""
Django app configuration for related products.
"""

from django.apps import AppConfig, apps


class RelatedProductsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "storefront.related_products"
    label = "related_products"
    verbose_name = "Related Products"

    def ready(self):
        # Import signals to register them
        from storefront.related_products import signals

        signals.connect_relation_owners(apps.get_models())
