from abc import ABC, abstractmethod
from typing import Any


class ActivitySink(ABC):
    """Destination for the one-line outcome of each webhook invocation."""

    @abstractmethod
    def log(self, message: str, subject_id: Any) -> None:
        """Record ``message`` against ``subject_id`` (``0`` when unknown)."""
        pass
