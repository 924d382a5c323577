import logging
from typing import Any

from .base import ActivitySink


class LoggingSink(ActivitySink):
    """Writes activity entries to Python logging."""

    def __init__(self, logger_name: str = "jwt_webhooks.activity", level: int = logging.INFO):
        self.logger = logging.getLogger(logger_name)
        self.level = level

    def log(self, message: str, subject_id: Any) -> None:
        self.logger.log(
            self.level,
            "[subject %s] %s",
            subject_id,
            message,
            extra={"subject_id": subject_id},
        )
