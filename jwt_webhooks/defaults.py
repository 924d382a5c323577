"""
Default configuration for the jwt-webhooks library.

Projects override any of these keys through the ``JWT_WEBHOOKS`` Django
setting; nested dictionaries are deep-merged so a project only needs to
declare what it changes.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"

SETTINGS_NAME = "JWT_WEBHOOKS"


# --------------------------------------------------------------------------- #
# Library-wide defaults
# --------------------------------------------------------------------------- #
LIBRARY_DEFAULTS: dict[str, Any] = {
    "webhook_settings": {
        "enabled": False,
        "signing_secret": None,
        "secret_env_var": "JWT_WEBHOOKS_SECRET",
        "endpoints": {},
        "events": {"created": True, "updated": True, "deleted": True},
        "timeout_seconds": 10,
        "body_snippet_length": 200,
        "fail_on_http_error": False,
        "models": [],
        "field_aliases": {},
        "activity_sink": "jwt_webhooks.sinks.LoggingSink",
    },
}


def merge_settings(*settings_dicts: dict[str, Any]) -> dict[str, Any]:
    """
    Merge multiple settings dictionaries with deep merging for nested dicts.
    Later dictionaries override earlier ones.
    """
    result: dict[str, Any] = {}
    for settings_dict in settings_dicts:
        for key, value in settings_dict.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = merge_settings(result[key], value)
            else:
                result[key] = value
    return result
