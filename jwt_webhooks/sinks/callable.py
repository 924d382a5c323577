from typing import Any, Callable

from .base import ActivitySink


class CallableSink(ActivitySink):
    """Adapts a plain ``func(message, subject_id)`` to the sink interface."""

    def __init__(self, func: Callable[[str, Any], Any]):
        self.func = func

    def log(self, message: str, subject_id: Any) -> None:
        self.func(message, subject_id)
