"""HTTP delivery of signed webhook payloads."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Mapping, Optional

import requests
from django.core.serializers.json import DjangoJSONEncoder

from .types import DeliveryResult, HttpError, Success, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_BODY_SNIPPET_LENGTH = 200
# Upper bound of UTF-8 bytes per decoded character.
_MAX_BYTES_PER_CHAR = 4


def encode_payload(payload: Mapping[str, Any]) -> str:
    return json.dumps(dict(payload), separators=(",", ":"), cls=DjangoJSONEncoder)


def build_headers(token: str) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {token}",
    }


class Dispatcher:
    """
    Sends one signed payload as a single POST; no retries.

    Any response that arrives counts as ``Success`` unless
    ``fail_on_http_error`` is set, in which case non-2xx responses become
    ``HttpError``. Network failures and timeouts become ``TransportError``.
    Other exceptions propagate to the caller.

    ``timeout_seconds`` bounds the whole exchange, body included. Only the
    first ``body_snippet_length`` characters of the body are read.
    """

    def __init__(
        self,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        body_snippet_length: int = DEFAULT_BODY_SNIPPET_LENGTH,
        fail_on_http_error: bool = False,
        session_factory: Optional[Callable[[], requests.Session]] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.body_snippet_length = max(0, int(body_snippet_length))
        self.fail_on_http_error = fail_on_http_error
        self._session_factory = session_factory or requests.Session

    def send(self, endpoint: str, payload: Mapping[str, Any], token: str) -> DeliveryResult:
        body = encode_payload(payload)
        headers = build_headers(token)
        deadline = time.monotonic() + self.timeout_seconds

        try:
            with self._session_factory() as session:
                with session.post(
                    endpoint,
                    data=body,
                    headers=headers,
                    timeout=self.timeout_seconds,
                    stream=True,
                ) as response:
                    status = int(response.status_code)
                    snippet = self._read_snippet(response, deadline)
        except requests.Timeout as exc:
            logger.warning("Webhook request to %s timed out: %s", endpoint, exc)
            return TransportError(
                f"Request timed out after {self.timeout_seconds:g}s: {exc}"
            )
        except requests.RequestException as exc:
            logger.warning("Webhook request to %s failed: %s", endpoint, exc)
            return TransportError(str(exc))

        if self.fail_on_http_error and not 200 <= status < 300:
            logger.warning("Webhook endpoint %s rejected delivery (status %s)", endpoint, status)
            return HttpError(status, snippet)

        logger.debug("Webhook delivered to %s (status %s)", endpoint, status)
        return Success(status, snippet)

    def _read_snippet(self, response: requests.Response, deadline: float) -> str:
        """
        Read the start of the body until the snippet is complete or the body ends.

        The socket timeout only bounds each read, so the overall deadline is
        checked between reads; a body trickling in past it is a timeout.
        """
        self._check_deadline(deadline)
        limit = self.body_snippet_length * _MAX_BYTES_PER_CHAR
        received = bytearray()
        if limit > 0:
            for chunk in response.iter_content(chunk_size=1):
                received.extend(chunk)
                if len(received) >= limit:
                    break
                self._check_deadline(deadline)
        try:
            text = received.decode(response.encoding or "utf-8", errors="replace")
        except LookupError:
            text = received.decode("utf-8", errors="replace")
        return text[: self.body_snippet_length]

    def _check_deadline(self, deadline: float) -> None:
        if time.monotonic() > deadline:
            raise requests.Timeout("deadline exceeded while reading the response")
