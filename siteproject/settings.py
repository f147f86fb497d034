"""
Django settings for siteproject.

Only what the press app needs: templates for page rendering, logging, and the
PRESS_MARKDOWN / PRESS_SITE blocks read by press.conf.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "siteproject-insecure-build-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "") == "1"

ALLOWED_HOSTS = []

INSTALLED_APPS = [
    "press",
]

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {},
    },
]

USE_TZ = True

PRESS_MARKDOWN = {
    "EXTENSIONS": ["fenced_code", "tables"],
    # heading_id, marker_id, section or scoped
    "ANCHOR_POLICY": os.environ.get("PRESS_ANCHOR_POLICY", "scoped"),
}

PRESS_SITE = {
    "BUILD_COMMAND": ["bundle", "exec", "jekyll", "build"],
    "CONFIG_FILE": "_prod_config.yml",
    "SOURCE_DIR": BASE_DIR,
    "OUTPUT_DIR": "_site",
    "CONTENT_DIR": "content",
    "REMOTE": "origin",
    "BRANCH": "gh-pages",
    "PUSH": os.environ.get("PRESS_PUSH", "1") != "0",
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "{levelname} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "press": {
            "handlers": ["console"],
            "level": os.environ.get("PRESS_LOG_LEVEL", "INFO"),
        },
    },
}
