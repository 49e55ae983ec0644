"""
Django settings for the numera project.
Values come from the environment (optionally a .env file).
"""

import os
from pathlib import Path

import structlog
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def _env_list(key: str, default: list[str]) -> list[str]:
    value = os.getenv(key, "")
    items = [part.strip() for part in value.split(",") if part.strip()]
    return items or default


MODE = os.getenv("MODE", "production")
DEBUG = MODE != "production"

SECRET_KEY = os.getenv("SECRET_KEY", "django-insecure-numera-dev-key")
ALLOWED_HOSTS = _env_list("ALLOWED_HOSTS", ["*"])

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "apps.exchange.apps.ExchangeConfig",
    "apps.ledger.apps.LedgerConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "core.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "core.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

MIGRATION_MODULES = {
    "ledger": "apps.ledger.infrastructure.persistence.migrations",
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

REST_FRAMEWORK = {
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
    ],
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Numera API",
    "DESCRIPTION": "Personal multi-account ledger with currency conversion",
    "VERSION": "1.0.0",
}

# Exchange rates
EXCHANGE_RATE_SOURCE = os.getenv("EXCHANGE_RATE_SOURCE", "hexarate")
EXCHANGE_RATE_BASE_URL = os.getenv(
    "EXCHANGE_RATE_BASE_URL", "https://hexarate.paikama.co/api/rates"
)
EXCHANGE_RATE_TIMEOUT = float(os.getenv("EXCHANGE_RATE_TIMEOUT", "10"))
EXCHANGE_RATE_CACHE_TTL = int(os.getenv("EXCHANGE_RATE_CACHE_TTL", "3600"))
EXCHANGE_RATE_CACHE_SHARDS = int(os.getenv("EXCHANGE_RATE_CACHE_SHARDS", "16"))

LEDGER_DEFAULT_CURRENCY = os.getenv("LEDGER_DEFAULT_CURRENCY", "EUR")

# Logging: structlog on top of stdlib logging
_shared_processors = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "structured": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processor": (
                structlog.processors.JSONRenderer()
                if MODE == "production"
                else structlog.dev.ConsoleRenderer()
            ),
            "foreign_pre_chain": _shared_processors,
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "structured",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO" if MODE == "production" else "DEBUG",
    },
    "loggers": {
        "django": {"level": "INFO"},
    },
}

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        *_shared_processors,
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)
