"""
Compact HS256 token signing for webhook payloads.

The token is a standard JWT: ``base64url(header) . base64url(payload) .
base64url(HMAC-SHA256(secret, header_segment + "." + payload_segment))``.
No ``iat``/``exp`` claims are added, so identical payloads signed with the
same secret always produce the identical token.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import jwt
from django.core.exceptions import ImproperlyConfigured
from django.core.serializers.json import DjangoJSONEncoder

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
TOKEN_HEADER = {"alg": TOKEN_ALGORITHM, "typ": "JWT"}


def sign_token(payload: Mapping[str, Any], secret: str) -> str:
    """
    Sign ``payload`` with ``secret``.

    The payload is serialized in insertion order with compact separators,
    which is what ends up inside the payload segment.
    """
    return jwt.encode(
        dict(payload),
        secret,
        algorithm=TOKEN_ALGORITHM,
        json_encoder=DjangoJSONEncoder,
    )


def verify_token(token: str, secret: str) -> dict[str, Any]:
    """
    Verify ``token`` against ``secret`` and return the decoded payload.

    Raises:
        jwt.InvalidSignatureError: the token was signed with another secret
            or has been tampered with.
        jwt.InvalidTokenError: the token is malformed.
    """
    return jwt.decode(token, secret, algorithms=[TOKEN_ALGORITHM])


class TokenSigner:
    """
    Signs payloads with a secret injected at construction time.

    An empty secret is a deployment mistake, so it is rejected here rather
    than surfacing as a failure on every event.
    """

    def __init__(self, secret: str):
        if not secret or not str(secret).strip():
            raise ImproperlyConfigured("A non-empty webhook signing secret is required.")
        self._secret = str(secret)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(secret='***')"

    def sign(self, payload: Mapping[str, Any]) -> str:
        return sign_token(payload, self._secret)

    def verify(self, token: str) -> dict[str, Any]:
        return verify_token(token, self._secret)
