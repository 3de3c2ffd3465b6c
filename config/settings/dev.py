"""Development settings. Do not use these settings in production!"""

from .base import *  # noqa: F401,F403

DEBUG = True

ALLOWED_HOSTS = ["*"]

LOG_LEVEL = "DEBUG"
LOGGING["loggers"]["experiences"]["level"] = LOG_LEVEL  # noqa: F405
