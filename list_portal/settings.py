import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "insecure-secret-key")
DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"
ALLOWED_HOSTS = []

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "rest_framework",
    "items.apps.ItemsConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "list_portal.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "list_portal.wsgi.application"
ASGI_APPLICATION = "list_portal.asgi.application"

# The collection lives in memory; the database is only here for Django's own apps.
DJANGO_DB_PATH = os.environ.get("DJANGO_DB_PATH")
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": DJANGO_DB_PATH or ":memory:",
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "items.exceptions.api_exception_handler",
}

# Items
ITEMS_SEED_COUNT = int(os.getenv("ITEMS_SEED_COUNT", "1000000"))
ITEMS_VALUE_TEMPLATE = os.getenv("ITEMS_VALUE_TEMPLATE", "Item {n}")
ITEMS_DEFAULT_PAGE_SIZE = int(os.getenv("ITEMS_DEFAULT_PAGE_SIZE", "20"))
ITEMS_SEARCH_CACHE_SIZE = int(os.getenv("ITEMS_SEARCH_CACHE_SIZE", "8"))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "items": {
            "handlers": ["console"],
            "level": os.getenv("ITEMS_LOG_LEVEL", "INFO"),
        },
        "list_client": {
            "handlers": ["console"],
            "level": os.getenv("ITEMS_LOG_LEVEL", "INFO"),
        },
    },
}

# === DEV convenience: hosts (idempotent) ===
if DEBUG:
    ALLOWED_HOSTS = ["*"]
# === END DEV block ===
