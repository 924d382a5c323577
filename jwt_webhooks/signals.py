"""Signal bindings for webhook delivery."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from django.db import transaction
from django.db.models.signals import post_delete, post_save

from .config import get_webhook_settings
from .payloads import get_shape
from .router import dispatch_event
from .types import EventKind

logger = logging.getLogger(__name__)

_SIGNALS_CONNECTED = False


def ensure_webhook_signals() -> None:
    global _SIGNALS_CONNECTED
    if _SIGNALS_CONNECTED:
        return

    post_save.connect(
        _handle_post_save,
        dispatch_uid="jwt_webhooks_post_save",
    )
    post_delete.connect(
        _handle_post_delete,
        dispatch_uid="jwt_webhooks_post_delete",
    )
    _SIGNALS_CONNECTED = True


def disconnect_webhook_signals() -> None:
    global _SIGNALS_CONNECTED
    post_save.disconnect(dispatch_uid="jwt_webhooks_post_save")
    post_delete.disconnect(dispatch_uid="jwt_webhooks_post_delete")
    _SIGNALS_CONNECTED = False


def instance_to_record(
    instance: Any,
    event: EventKind | str,
    aliases: Optional[Mapping[str, str]] = None,
) -> dict[str, Any]:
    """
    Flatten a model instance into the record shape the payload builder reads.

    ``aliases`` maps record keys to model field names, e.g.
    ``{"firstname": "first_name"}``. The event's identifier field is always
    taken from the primary key.
    """
    record: dict[str, Any] = {}
    for field in getattr(instance.__class__._meta, "concrete_fields", []):
        record[_select_field_key(field)] = field.value_from_object(instance)

    for key, attribute in (aliases or {}).items():
        if attribute in record:
            record[key] = record[attribute]
        else:
            record[key] = getattr(instance, attribute, None)

    record[get_shape(event).identifier_source] = getattr(instance, "pk", None)
    return record


def _select_field_key(field: Any) -> str:
    if getattr(field, "is_relation", False) and (
        getattr(field, "many_to_one", False) or getattr(field, "one_to_one", False)
    ):
        return getattr(field, "attname", field.name)
    return field.name


def _handle_post_save(sender, instance, created: bool, **kwargs) -> None:
    if kwargs.get("raw"):
        return
    event = EventKind.CREATED if created else EventKind.UPDATED
    _schedule_dispatch(sender, instance, event)


def _handle_post_delete(sender, instance, **kwargs) -> None:
    if kwargs.get("raw"):
        return
    _schedule_dispatch(sender, instance, EventKind.DELETED)


def _schedule_dispatch(sender, instance, event: EventKind) -> None:
    settings = get_webhook_settings()
    if not settings.enabled or not settings.event_enabled(event):
        return
    if _model_label(sender) not in settings.models:
        return

    # The primary key is cleared after deletion, so capture the record now.
    record = instance_to_record(instance, event, settings.field_aliases)

    def _dispatch() -> None:
        try:
            dispatch_event(event, record)
        except Exception as exc:
            logger.warning("Webhook dispatch failed for %s: %s", instance, exc)

    try:
        transaction.on_commit(_dispatch)
    except Exception:
        _dispatch()


def _model_label(model: Any) -> str:
    return str(model._meta.label_lower)
