"""
Test settings for EdgeCacheLicenseService.
"""

from .base import *  # noqa: F403, F401

DEBUG = False

# Use in-memory SQLite for tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

LICENSE_ENGINE = {
    "MASTER_KEY": "EDGE-MASTER-0000",
    "RATE_LIMIT_WINDOW_SECONDS": 60,
    "RATE_LIMIT_MAX_REQUESTS": 1000,
}

SIGNING_SECRET = ""
ADMIN_TOKEN = "test-admin-token"

# Disable logging during tests
LOGGING_CONFIG = None
