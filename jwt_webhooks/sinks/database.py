from typing import Any

from .base import ActivitySink


class DatabaseSink(ActivitySink):
    """Writes activity entries to the ``WebhookActivity`` table."""

    def log(self, message: str, subject_id: Any) -> None:
        from jwt_webhooks.models import WebhookActivity

        WebhookActivity.objects.create(
            message=message,
            subject_id=str(subject_id if subject_id is not None else 0)[:64],
        )
