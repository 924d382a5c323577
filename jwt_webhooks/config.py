"""Configuration helpers for webhook delivery."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Optional

from django.conf import settings as django_settings
from django.core.exceptions import ImproperlyConfigured

from .defaults import LIBRARY_DEFAULTS, SETTINGS_NAME, merge_settings
from .types import EventKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebhookSettings:
    enabled: bool = False
    signing_secret: Optional[str] = field(default=None, repr=False)
    secret_env_var: str = "JWT_WEBHOOKS_SECRET"
    endpoints: dict[EventKind, str] = field(default_factory=dict)
    events: dict[EventKind, bool] = field(default_factory=dict)
    timeout_seconds: float = 10
    body_snippet_length: int = 200
    fail_on_http_error: bool = False
    models: list[str] = field(default_factory=list)
    field_aliases: dict[str, str] = field(default_factory=dict)
    activity_sink: Any = "jwt_webhooks.sinks.LoggingSink"

    def event_enabled(self, event: EventKind) -> bool:
        return bool(self.events.get(event, False))

    def endpoint_for(self, event: EventKind) -> Optional[str]:
        return self.endpoints.get(event)


def webhooks_enabled(settings: WebhookSettings) -> bool:
    return bool(settings.enabled and settings.endpoints)


def get_webhook_settings() -> WebhookSettings:
    defaults = LIBRARY_DEFAULTS.get("webhook_settings", {})
    merged = dict(defaults)

    external = getattr(django_settings, SETTINGS_NAME, None)
    if isinstance(external, dict):
        merged = merge_settings(merged, external)
    elif external is not None:
        logger.warning("%s must be a dict; ignoring %r", SETTINGS_NAME, type(external))

    return _build_settings(merged)


def validate_webhook_settings(settings: WebhookSettings) -> None:
    """Raise ``ImproperlyConfigured`` for settings that cannot deliver safely."""
    if not settings.enabled:
        return
    if not settings.signing_secret:
        raise ImproperlyConfigured(
            f"{SETTINGS_NAME} is enabled but no signing secret is configured; "
            f"set 'signing_secret' or the {settings.secret_env_var} environment variable."
        )
    if not settings.endpoints:
        raise ImproperlyConfigured(
            f"{SETTINGS_NAME} is enabled but no endpoints are configured."
        )


def _build_settings(config: dict[str, Any]) -> WebhookSettings:
    secret_env_var = str(config.get("secret_env_var") or "JWT_WEBHOOKS_SECRET")
    signing_secret = _coerce_optional_str(config.get("signing_secret"))
    if signing_secret is None:
        signing_secret = _coerce_optional_str(os.environ.get(secret_env_var))

    return WebhookSettings(
        enabled=bool(config.get("enabled", False)),
        signing_secret=signing_secret,
        secret_env_var=secret_env_var,
        endpoints=_normalize_endpoints(config.get("endpoints")),
        events=_normalize_events(
            config.get("events"),
            LIBRARY_DEFAULTS.get("webhook_settings", {}).get("events", {}),
        ),
        timeout_seconds=_coerce_positive_float(config.get("timeout_seconds"), 10),
        body_snippet_length=_coerce_non_negative_int(config.get("body_snippet_length"), 200),
        fail_on_http_error=bool(config.get("fail_on_http_error", False)),
        models=_normalize_list(config.get("models")),
        field_aliases=_normalize_aliases(config.get("field_aliases")),
        activity_sink=config.get("activity_sink") or "jwt_webhooks.sinks.LoggingSink",
    )


def _normalize_events(
    raw_events: Any, default_events: dict[str, Any]
) -> dict[EventKind, bool]:
    if not isinstance(default_events, dict) or not default_events:
        default_events = {"created": True, "updated": True, "deleted": True}
    normalized = {
        EventKind.coerce(key): bool(value) for key, value in default_events.items()
    }

    if isinstance(raw_events, dict):
        for key, value in raw_events.items():
            event = _coerce_event(key)
            if event is None:
                continue
            normalized[event] = bool(value)
        return normalized

    if isinstance(raw_events, (list, tuple, set)):
        enabled = {_coerce_event(item) for item in raw_events if item}
        return {key: key in enabled for key in normalized}

    if isinstance(raw_events, str) and raw_events:
        enabled = {_coerce_event(raw_events)}
        return {key: key in enabled for key in normalized}

    return normalized


def _normalize_endpoints(value: Any) -> dict[EventKind, str]:
    if isinstance(value, str):
        url = value.strip()
        if not url:
            return {}
        return {event: url for event in EventKind}

    if not isinstance(value, dict):
        return {}

    endpoints: dict[EventKind, str] = {}
    for key, url in value.items():
        event = _coerce_event(key)
        if event is None:
            continue
        text = _coerce_optional_str(url)
        if not text:
            logger.warning("Webhook endpoint for '%s' missing url; skipping", key)
            continue
        endpoints[event] = text
    return endpoints


def _normalize_list(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, (list, tuple, set)):
        items = value
    else:
        items = [value]
    normalized: list[str] = []
    for item in items:
        if item is None:
            continue
        text = str(item).strip()
        if not text:
            continue
        normalized.append(text.lower())
    return normalized


def _normalize_aliases(value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    aliases: dict[str, str] = {}
    for key, target in value.items():
        if not key or not target:
            continue
        aliases[str(key)] = str(target)
    return aliases


def _coerce_event(value: Any) -> Optional[EventKind]:
    try:
        return EventKind.coerce(value)
    except ValueError:
        logger.warning("Unknown webhook event kind '%s'; ignoring", value)
        return None


def _coerce_positive_float(value: Any, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _coerce_non_negative_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 0 else default


def _coerce_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
