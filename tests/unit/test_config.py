"""
Unit tests for webhook settings loading and validation.
"""

import pytest
from django.core.exceptions import ImproperlyConfigured
from django.test import override_settings

from jwt_webhooks.config import (
    get_webhook_settings,
    validate_webhook_settings,
    webhooks_enabled,
)
from jwt_webhooks.types import EventKind

pytestmark = pytest.mark.unit


def test_defaults_when_setting_is_missing():
    with override_settings(JWT_WEBHOOKS={}):
        settings = get_webhook_settings()
    assert settings.enabled is False
    assert settings.timeout_seconds == 10
    assert settings.body_snippet_length == 200
    assert settings.fail_on_http_error is False
    assert settings.events == {event: True for event in EventKind}
    assert not webhooks_enabled(settings)


def test_per_event_endpoints(webhook_config):
    with override_settings(JWT_WEBHOOKS=webhook_config):
        settings = get_webhook_settings()
    assert webhooks_enabled(settings)
    assert settings.endpoint_for(EventKind.UPDATED) == "https://hooks.example.com/client-edit"


def test_single_endpoint_applies_to_every_event(secret):
    config = {"enabled": True, "signing_secret": secret, "endpoints": "https://n8n.example.com/hook"}
    with override_settings(JWT_WEBHOOKS=config):
        settings = get_webhook_settings()
    assert settings.endpoints == {event: "https://n8n.example.com/hook" for event in EventKind}


def test_blank_and_unknown_endpoints_are_skipped(secret):
    config = {
        "enabled": True,
        "signing_secret": secret,
        "endpoints": {"created": "  ", "ARCHIVED": "https://x", "Deleted": "https://y"},
    }
    with override_settings(JWT_WEBHOOKS=config):
        settings = get_webhook_settings()
    assert settings.endpoints == {EventKind.DELETED: "https://y"}


def test_event_list_enables_only_listed_events():
    with override_settings(JWT_WEBHOOKS={"events": ["created"]}):
        settings = get_webhook_settings()
    assert settings.event_enabled(EventKind.CREATED)
    assert not settings.event_enabled(EventKind.UPDATED)
    assert not settings.event_enabled(EventKind.DELETED)


def test_secret_falls_back_to_environment(monkeypatch, webhook_config):
    webhook_config.pop("signing_secret")
    monkeypatch.setenv("JWT_WEBHOOKS_SECRET", "from-the-environment-0123456789abcdef")
    with override_settings(JWT_WEBHOOKS=webhook_config):
        settings = get_webhook_settings()
    assert settings.signing_secret == "from-the-environment-0123456789abcdef"
    assert "from-the-environment" not in repr(settings)


def test_custom_secret_env_var(monkeypatch, webhook_config):
    webhook_config.pop("signing_secret")
    webhook_config["secret_env_var"] = "CRM_HOOK_SECRET"
    monkeypatch.setenv("CRM_HOOK_SECRET", "crm-secret-0123456789abcdef0123456789")
    with override_settings(JWT_WEBHOOKS=webhook_config):
        assert get_webhook_settings().signing_secret.startswith("crm-secret")


def test_models_are_lowercased():
    with override_settings(JWT_WEBHOOKS={"models": ["test_app.Client", " "]}):
        assert get_webhook_settings().models == ["test_app.client"]


def test_invalid_timeout_uses_default():
    with override_settings(JWT_WEBHOOKS={"timeout_seconds": "soon"}):
        assert get_webhook_settings().timeout_seconds == 10


@pytest.mark.parametrize("value,expected", [(-1, 200), ("many", 200), (None, 200), (0, 0), ("50", 50)])
def test_body_snippet_length_is_never_negative(value, expected):
    with override_settings(JWT_WEBHOOKS={"body_snippet_length": value}):
        assert get_webhook_settings().body_snippet_length == expected


def test_enabled_without_secret_is_improperly_configured(monkeypatch, webhook_config):
    monkeypatch.delenv("JWT_WEBHOOKS_SECRET", raising=False)
    webhook_config["signing_secret"] = ""
    with override_settings(JWT_WEBHOOKS=webhook_config):
        settings = get_webhook_settings()
    with pytest.raises(ImproperlyConfigured):
        validate_webhook_settings(settings)


def test_enabled_without_endpoints_is_improperly_configured(secret):
    with override_settings(JWT_WEBHOOKS={"enabled": True, "signing_secret": secret}):
        settings = get_webhook_settings()
    with pytest.raises(ImproperlyConfigured):
        validate_webhook_settings(settings)


def test_disabled_settings_always_validate():
    with override_settings(JWT_WEBHOOKS={"enabled": False}):
        validate_webhook_settings(get_webhook_settings())
