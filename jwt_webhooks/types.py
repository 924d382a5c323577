"""
Event kinds and delivery outcomes shared by the webhook core.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class EventKind(str, Enum):
    """Client lifecycle events that trigger a webhook."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"

    @classmethod
    def coerce(cls, value: Union["EventKind", str]) -> "EventKind":
        if isinstance(value, cls):
            return value
        return cls(str(value or "").strip().lower())


# Host hook names, used as the prefix of validation log entries.
HOOK_NAMES: dict[EventKind, str] = {
    EventKind.CREATED: "ClientAdd",
    EventKind.UPDATED: "ClientEdit",
    EventKind.DELETED: "ClientDelete",
}


@dataclass(frozen=True)
class Success:
    """The request completed; ``status`` may still be non-2xx."""

    status: int
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(frozen=True)
class HttpError:
    """Non-2xx response, only produced when ``fail_on_http_error`` is enabled."""

    status: int
    body: str = ""


@dataclass(frozen=True)
class TransportError:
    message: str


@dataclass(frozen=True)
class UnexpectedFault:
    message: str


@dataclass(frozen=True)
class ValidationError:
    message: str
    field: Optional[str] = None


DeliveryResult = Union[Success, HttpError, TransportError, UnexpectedFault, ValidationError]
