"""Settings used by the pytest suite.

Runs on in-memory SQLite unless DB_ENGINE points at a real server, which
the row-locking tests need.
"""

import os

from .base import *  # noqa: F401,F403

if not os.environ.get("DB_ENGINE"):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "experiences-tests",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

LOGGING["loggers"]["experiences"]["level"] = "WARNING"  # noqa: F405
