"""Signed (HS256 JWT) webhooks for client lifecycle events."""

from .defaults import LIBRARY_VERSION

__version__ = LIBRARY_VERSION
