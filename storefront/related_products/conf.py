"""
Settings access for the related products app.
"""

from django.conf import settings

DEFAULTS = {
    "RELATED_PRODUCTS_CACHE_TIMEOUT": 60,
}


def get_setting(name: str):
    """Return a RELATED_PRODUCTS_* setting, falling back to the app default."""
    return getattr(settings, name, DEFAULTS[name])
