"""
POS – Django Settings (Infrastructure Only)
============================================
Django serves the thin HTTP adapter. The POS core does not import
Django and does not need these settings to run.

LOGGING is also the logging configuration of the console CLI.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

POS_VERSION = "1.0.0"

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("POS_SECRET_KEY", "pos-dev-key-replace-before-deployment")

DEBUG = os.environ.get("POS_DEBUG", "1") == "1"

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]

# ── Installed Apps ────────────────────────────────────────────
# No models: the catalog lives in process memory.
INSTALLED_APPS = []

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# ── Database ──────────────────────────────────────────────────
# Persistence across restarts is out of scope.
DATABASES = {}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "es"
TIME_ZONE = "America/El_Salvador"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Logging ───────────────────────────────────────────────────
# pos.events carries the inventory/cart/checkout event log. The console
# CLI adds a file handler writing POS_LOG_FILE, relative to the working
# directory unless absolute.
POS_LOG_FILE = os.environ.get("POS_LOG_FILE", "pos.log")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "pos": {
            "format": "[{asctime}] [{levelname}] {name}: {message}",
            "datefmt": "%Y-%m-%d %H:%M:%S",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "pos",
            "level": "WARNING",
        },
    },
    "loggers": {
        "pos": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
    },
}
