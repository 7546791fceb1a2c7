"""
ValidationEvent model.
"""
import uuid

from django.db import models


class ValidationEvent(models.Model):
    """
    Append-only audit record of a validation attempt.

    Rows are inserted once and never updated.
    """

    RESULT_CHOICES = [
        ("allow", "Allow"),
        ("deny", "Deny"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    credential = models.ForeignKey(
        "credentials.Credential",
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="validation_events",
    )
    api_key = models.CharField(max_length=100, blank=True, default="")
    ip_address = models.CharField(max_length=64, blank=True, default="")
    domain = models.CharField(max_length=253, blank=True, default="")
    result = models.CharField(max_length=10, choices=RESULT_CHOICES)
    error_code = models.CharField(max_length=32)
    timestamp = models.DateTimeField(db_index=True)

    class Meta:
        db_table = "validation_events"
        ordering = ["-timestamp"]
        indexes = [
            models.Index(fields=["credential", "timestamp"]),
        ]

    def __str__(self):
        return f"{self.api_key} {self.error_code} @ {self.timestamp}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Validation events are append-only")
        super().save(*args, **kwargs)
