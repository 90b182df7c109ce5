"""
Django base settings for the storefront project.

Shared settings that are common to development and test environments.
"""

from pathlib import Path

import dj_database_url
from decouple import config

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# =============================================================================
# APPLICATION DEFINITION
# =============================================================================

INSTALLED_APPS = [
    # Django core
    "django.contrib.contenttypes",
    # Storefront application
    "storefront.catalog.apps.CatalogConfig",
    "storefront.related_products.apps.RelatedProductsConfig",
]

MIDDLEWARE = []

# =============================================================================
# DATABASE
# =============================================================================

DATABASES = {
    "default": dj_database_url.config(
        default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}",
        conn_max_age=config("DB_CONN_MAX_AGE", default=0, cast=int),
    )
}

# =============================================================================
# INTERNATIONALIZATION
# =============================================================================

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# =============================================================================
# DEFAULT FIELD TYPE
# =============================================================================

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = config("LOG_LEVEL", default="INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "structured": {
            "()": "storefront.logging_utils.StructuredLogFormatter",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "structured",
        },
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "WARNING",
        },
        "storefront": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}

# =============================================================================
# CACHE SETTINGS
# =============================================================================

# Redis when REDIS_URL is configured, local memory cache otherwise
REDIS_URL = config("REDIS_URL", default="")

if REDIS_URL:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.redis.RedisCache",
            "LOCATION": f"{REDIS_URL}/1",
            "KEY_PREFIX": "storefront",
            "TIMEOUT": 300,
        }
    }
else:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "storefront-cache",
            "OPTIONS": {
                "MAX_ENTRIES": 10000,
            },
            "TIMEOUT": 300,
        }
    }

# =============================================================================
# RELATED PRODUCTS
# =============================================================================

# Seconds the per-model RelationType index stays cached (0 disables caching).
# Every cache miss also runs a table introspection query before the
# RelationType query, so with 0 each accessor lookup costs both.
RELATED_PRODUCTS_CACHE_TIMEOUT = config(
    "RELATED_PRODUCTS_CACHE_TIMEOUT", default=60, cast=int
)
