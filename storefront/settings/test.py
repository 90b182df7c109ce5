"""
Test settings for the storefront project.
Optimized for fast test execution with an in-memory database
and simplified configurations.
"""
from .base import *  # noqa: F403, F405
import os

# Override SECRET_KEY for tests (not used in production)
SECRET_KEY = "test-secret-key-not-for-production-use-only"  # pragma: allowlist secret  # noqa: E501

# Use in-memory SQLite for fast tests (override DATABASE_URL if set)
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# If DATABASE_URL is explicitly set (like in CI), use it instead
if "DATABASE_URL" in os.environ:
    import dj_database_url

    DATABASES["default"] = dj_database_url.config(
        default=os.environ["DATABASE_URL"],
        conn_max_age=0,  # Don't reuse connections in tests
    )

# Use in-memory cache for tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "test-cache",
    }
}

# Disable logging during tests to reduce noise
LOGGING = {
    "version": 1,
    "disable_existing_loggers": True,
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
        },
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "CRITICAL",
        },
    },
}

RELATED_PRODUCTS_CACHE_TIMEOUT = 60

# Debug mode off in tests (matches production behavior)
DEBUG = False

# Allowed hosts for tests
ALLOWED_HOSTS = ["*"]
