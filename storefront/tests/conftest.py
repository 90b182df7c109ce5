"""
Shared pytest configuration for storefront tests.
"""

import pytest
from django.core.cache import cache
from hypothesis import HealthCheck, settings

# Reproducible property tests with no per-example deadline
settings.register_profile(
    "storefront",
    max_examples=100,
    derandomize=True,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.load_profile("storefront")


@pytest.fixture(autouse=True)
def clear_cache():
    """Cached RelationType indexes must not leak between tests."""
    cache.clear()
    yield
    cache.clear()
