"""
Development settings for the storefront project.

Inherits from base settings and adds development-specific configuration.
"""

from .base import *  # noqa: F403, F401
from .base import config, LOGGING

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = config(
    "SECRET_KEY", default="django-insecure-dev-key-change-in-production"
)

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config("DEBUG", default=True, cast=bool)

ALLOWED_HOSTS = config("ALLOWED_HOSTS", default="localhost,127.0.0.1").split(",")

# Verbose storefront logs while developing
LOGGING["loggers"]["storefront"]["level"] = config("LOG_LEVEL", default="DEBUG")
