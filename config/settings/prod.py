"""Production settings."""

import os

from .base import *  # noqa: F401,F403

DEBUG = False

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

if SECRET_KEY == "replace-me-in-production":  # noqa: F405
    raise RuntimeError("DJANGO_SECRET_KEY must be set in production")

DATABASES["default"]["ENGINE"] = os.environ.get(  # noqa: F405
    "DB_ENGINE", "django.db.backends.postgresql"
)
