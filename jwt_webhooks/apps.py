"""
Django app configuration for jwt-webhooks.

``ready()`` validates the webhook settings and connects the model signals
that trigger deliveries.
"""

import logging

from django.apps import AppConfig as BaseAppConfig

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for jwt-webhooks."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "jwt_webhooks"
    verbose_name = "JWT Webhooks"
    label = "jwt_webhooks"

    def ready(self):
        """Initialize the application after Django has loaded."""
        # Registers the setting_changed receiver that resets the router.
        from . import router  # noqa: F401

        try:
            self._setup_signals()
        except Exception as e:
            logger.error(f"Error initializing jwt-webhooks: {e}")
            # Don't raise in production to avoid breaking the app
            if self._is_debug_mode():
                raise

    def _setup_signals(self):
        """Validate settings and connect model signals when webhooks are enabled."""
        from .config import (
            get_webhook_settings,
            validate_webhook_settings,
            webhooks_enabled,
        )
        from .signals import ensure_webhook_signals

        webhook_settings = get_webhook_settings()
        if not webhooks_enabled(webhook_settings):
            logger.debug("Webhooks disabled; signals not connected")
            return

        validate_webhook_settings(webhook_settings)
        if not webhook_settings.models:
            logger.warning(
                "Webhooks enabled but no models configured; only manual dispatch is active"
            )
        ensure_webhook_signals()
        logger.info(
            "Webhook signals connected for models: %s",
            ", ".join(webhook_settings.models) or "none",
        )

    def _is_debug_mode(self):
        """Check if we're in debug mode."""
        try:
            from django.conf import settings as django_settings

            return getattr(django_settings, "DEBUG", False)
        except Exception:
            return False
