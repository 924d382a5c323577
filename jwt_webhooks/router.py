"""
Event routing: payload building, signing, delivery and activity logging.

Each supported event kind is bound to a ``WebhookHandler``; the router is a
plain registry of those handlers. ``dispatch`` never raises: every outcome
ends up as exactly one activity entry.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from django.core.signals import setting_changed
from django.dispatch import receiver

from .config import WebhookSettings, get_webhook_settings, validate_webhook_settings
from .defaults import SETTINGS_NAME
from .dispatcher import Dispatcher
from .payloads import PAYLOAD_SHAPES, PayloadShape, PayloadValidationError
from .signing import TokenSigner
from .sinks import ActivitySink, resolve_sink
from .types import (
    HOOK_NAMES,
    DeliveryResult,
    EventKind,
    HttpError,
    Success,
    TransportError,
    UnexpectedFault,
    ValidationError,
)

logger = logging.getLogger(__name__)

_ROUTER: Optional["EventRouter"] = None
_ROUTER_LOCK = threading.Lock()

SENT_MESSAGES: dict[EventKind, str] = {
    EventKind.CREATED: "Webhook sent for new client ID {subject_id}.",
    EventKind.UPDATED: "Webhook sent for client update, ID {subject_id}.",
    EventKind.DELETED: "Webhook sent for client deletion, ID {subject_id}.",
}


@dataclass(frozen=True)
class HookBinding:
    event: EventKind
    hook_name: str
    shape: PayloadShape
    endpoint: str
    sent_message: str

    @property
    def required_field(self) -> str:
        return self.shape.identifier_source

    @classmethod
    def for_event(cls, event: EventKind | str, endpoint: str) -> "HookBinding":
        event = EventKind.coerce(event)
        return cls(
            event=event,
            hook_name=HOOK_NAMES[event],
            shape=PAYLOAD_SHAPES[event],
            endpoint=endpoint,
            sent_message=SENT_MESSAGES[event],
        )


class WebhookHandler:
    """Handles one event kind: validate, sign, send, log."""

    def __init__(
        self,
        binding: HookBinding,
        signer: TokenSigner,
        dispatcher: Dispatcher,
        sink: ActivitySink,
    ):
        self.binding = binding
        self.signer = signer
        self.dispatcher = dispatcher
        self.sink = sink

    @property
    def event(self) -> EventKind:
        return self.binding.event

    def handle(self, record: Mapping[str, Any]) -> DeliveryResult:
        try:
            payload = self.binding.shape.build(record)
        except PayloadValidationError as exc:
            result = ValidationError(
                f"{self.binding.hook_name} hook failed: Missing client ID in variables.",
                field=exc.field,
            )
            self._log(result.message, 0)
            return result

        subject_id = payload[self.binding.shape.identifier_key]
        try:
            token = self.signer.sign(payload)
            result = self.dispatcher.send(self.binding.endpoint, payload, token)
        except Exception as exc:
            logger.exception(
                "Unexpected error delivering %s webhook for %s",
                self.binding.event.value,
                subject_id,
            )
            result = UnexpectedFault(str(exc))

        self._log(self.describe(result, subject_id), subject_id)
        return result

    def describe(self, result: DeliveryResult, subject_id: Any) -> str:
        if isinstance(result, Success):
            sent = self.binding.sent_message.format(subject_id=subject_id)
            return f"{sent} Response Status: {result.status}, Body: {result.body}"
        if isinstance(result, HttpError):
            return (
                f"Webhook rejected for client ID {subject_id}. "
                f"Response Status: {result.status}, Body: {result.body}"
            )
        if isinstance(result, TransportError):
            return f"Webhook request error: {result.message}"
        if isinstance(result, ValidationError):
            return result.message
        return f"Webhook Exception: {result.message}"

    def _log(self, message: str, subject_id: Any) -> None:
        try:
            self.sink.log(message, subject_id)
        except Exception as exc:
            logger.error(
                "Failed to write webhook activity for %s: %s (%s)",
                subject_id,
                exc,
                message,
            )


class EventRouter:
    """Registry of ``WebhookHandler`` keyed by event kind."""

    def __init__(self, handlers: Optional[Iterable[WebhookHandler]] = None):
        self._handlers: dict[EventKind, WebhookHandler] = {}
        for handler in handlers or ():
            self.register(handler)

    def register(self, handler: WebhookHandler) -> "EventRouter":
        self._handlers[handler.event] = handler
        return self

    def handler_for(self, event: EventKind | str) -> Optional[WebhookHandler]:
        try:
            return self._handlers.get(EventKind.coerce(event))
        except ValueError:
            return None

    @property
    def events(self) -> list[EventKind]:
        return list(self._handlers)

    def dispatch(
        self, event: EventKind | str, record: Mapping[str, Any]
    ) -> Optional[DeliveryResult]:
        handler = self.handler_for(event)
        if handler is None:
            logger.debug("No webhook handler registered for event %r", event)
            return None
        try:
            return handler.handle(record)
        except Exception as exc:
            logger.exception("Webhook handler for %s failed", handler.event.value)
            return UnexpectedFault(str(exc))


def build_router(settings: WebhookSettings) -> EventRouter:
    router = EventRouter()
    if not settings.enabled:
        return router

    validate_webhook_settings(settings)
    signer = TokenSigner(settings.signing_secret)
    dispatcher = Dispatcher(
        timeout_seconds=settings.timeout_seconds,
        body_snippet_length=settings.body_snippet_length,
        fail_on_http_error=settings.fail_on_http_error,
    )
    sink = resolve_sink(settings.activity_sink)

    for event in EventKind:
        endpoint = settings.endpoint_for(event)
        if not settings.event_enabled(event) or not endpoint:
            continue
        router.register(
            WebhookHandler(HookBinding.for_event(event, endpoint), signer, dispatcher, sink)
        )
    return router


def get_router() -> EventRouter:
    global _ROUTER
    if _ROUTER is not None:
        return _ROUTER
    with _ROUTER_LOCK:
        if _ROUTER is None:
            _ROUTER = build_router(get_webhook_settings())
            logger.debug(
                "Webhook router built for events: %s",
                ", ".join(event.value for event in _ROUTER.events) or "none",
            )
    return _ROUTER


def reset_router() -> None:
    global _ROUTER
    with _ROUTER_LOCK:
        _ROUTER = None


def dispatch_event(
    event: EventKind | str, record: Mapping[str, Any]
) -> Optional[DeliveryResult]:
    """Dispatch ``record`` through the configured router; never raises."""
    try:
        router = get_router()
    except Exception as exc:
        logger.error("Webhook router unavailable, dropping %s event: %s", event, exc)
        return None
    return router.dispatch(event, record)


@receiver(setting_changed)
def _reset_router_on_settings_change(sender, setting, **kwargs) -> None:
    if setting == SETTINGS_NAME:
        reset_router()
