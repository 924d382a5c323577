"""
Webhook activity database models.
"""

from django.db import models


class WebhookActivity(models.Model):
    """One outcome entry per webhook invocation, written by ``DatabaseSink``."""

    message = models.TextField()
    subject_id = models.CharField(max_length=64, db_index=True, default="0")
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        app_label = "jwt_webhooks"
        db_table = "jwt_webhooks_activity"
        verbose_name = "Webhook Activity"
        verbose_name_plural = "Webhook Activity"
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"[{self.subject_id}] {self.message[:80]}"
