"""Activity sinks receiving one entry per webhook invocation."""

import builtins
import inspect
from typing import Any

from django.utils.module_loading import import_string

from .base import ActivitySink
from .callable import CallableSink
from .database import DatabaseSink
from .logger import LoggingSink


def resolve_sink(value: Any) -> ActivitySink:
    """
    Build a sink from a dotted path, a sink class, a sink instance or a
    ``func(message, subject_id)`` callable.
    """
    if value is None:
        return LoggingSink()
    if isinstance(value, str):
        value = import_string(value)
    if isinstance(value, ActivitySink):
        return value
    if inspect.isclass(value) and issubclass(value, ActivitySink):
        return value()
    if builtins.callable(value):
        return CallableSink(value)
    raise TypeError(f"Cannot use {value!r} as a webhook activity sink")


__all__ = [
    "ActivitySink",
    "CallableSink",
    "DatabaseSink",
    "LoggingSink",
    "resolve_sink",
]
