"""
Canonical webhook payloads per event kind.

Key order matters: it fixes the bytes of the payload segment that gets signed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .types import EventKind


class PayloadValidationError(ValueError):
    """Raised when a record lacks the identifier an event kind requires."""

    def __init__(self, event: EventKind, field: str):
        self.event = event
        self.field = field
        super().__init__(f"Missing required field '{field}' for {event.value} event")


@dataclass(frozen=True)
class PayloadField:
    """
    One payload key.

    ``source`` names the record field to read (defaults to ``key``); a field
    with a ``constant`` ignores the record entirely.
    """

    key: str
    source: Optional[str] = None
    constant: Any = None

    def resolve(self, record: Mapping[str, Any]) -> Any:
        if self.constant is not None:
            return self.constant
        value = record.get(self.source or self.key)
        return "" if value is None else value


@dataclass(frozen=True)
class PayloadShape:
    event: EventKind
    identifier_key: str
    identifier_source: str
    fields: tuple[PayloadField, ...]

    def build(self, record: Mapping[str, Any]) -> dict[str, Any]:
        identifier = record.get(self.identifier_source)
        if identifier is None:
            raise PayloadValidationError(self.event, self.identifier_source)

        payload: dict[str, Any] = {}
        for payload_field in self.fields:
            if payload_field.key == self.identifier_key:
                payload[payload_field.key] = identifier
            else:
                payload[payload_field.key] = payload_field.resolve(record)
        return payload


def _identifier(source: str) -> PayloadField:
    return PayloadField("clientId", source=source)


PAYLOAD_SHAPES: dict[EventKind, PayloadShape] = {
    EventKind.CREATED: PayloadShape(
        event=EventKind.CREATED,
        identifier_key="clientId",
        identifier_source="client_id",
        fields=(
            PayloadField("firstname"),
            PayloadField("lastname"),
            PayloadField("email"),
            _identifier("client_id"),
        ),
    ),
    EventKind.UPDATED: PayloadShape(
        event=EventKind.UPDATED,
        identifier_key="clientId",
        identifier_source="userid",
        fields=(
            _identifier("userid"),
            PayloadField("firstname"),
            PayloadField("lastname"),
            PayloadField("email"),
            PayloadField("action", constant="updated"),
        ),
    ),
    EventKind.DELETED: PayloadShape(
        event=EventKind.DELETED,
        identifier_key="clientId",
        identifier_source="userid",
        fields=(
            _identifier("userid"),
            PayloadField("action", constant="deleted"),
        ),
    ),
}


def get_shape(event: EventKind | str) -> PayloadShape:
    return PAYLOAD_SHAPES[EventKind.coerce(event)]


def build_payload(shape: PayloadShape, record: Mapping[str, Any]) -> dict[str, Any]:
    return shape.build(record)


def build(event: EventKind | str, record: Mapping[str, Any]) -> dict[str, Any]:
    """Build the payload for ``event`` or raise ``PayloadValidationError``."""
    return build_payload(get_shape(event), record)
