"""Django settings used by the test suite."""

SECRET_KEY = "jwt-webhooks-test-key"
DEBUG = False
USE_TZ = True

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "jwt_webhooks",
    "test_app",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

MIGRATION_MODULES = {"test_app": None}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Shared-secret length matches what receivers should require (>= 32 chars).
TEST_WEBHOOK_SECRET = "test-secret-0123456789abcdef0123456789"

JWT_WEBHOOKS = {
    "enabled": False,
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "loggers": {
        "jwt_webhooks": {"handlers": ["console"], "level": "WARNING"},
    },
}
