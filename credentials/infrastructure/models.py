"""
Credential (license key) model.
"""
import uuid

from django.db import models


class Credential(models.Model):
    """
    An issued license key.

    ``key_string`` is public and globally unique; ``secret_hash`` is the
    sha256 of the one-time secret.
    """

    STATUS_CHOICES = [
        ("active", "Active"),
        ("revoked", "Revoked"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key_string = models.CharField(max_length=100, unique=True)
    secret_hash = models.CharField(max_length=64)
    owner = models.ForeignKey(
        "identities.Identity", on_delete=models.PROTECT, related_name="credentials"
    )
    product = models.ForeignKey(
        "products.Product", on_delete=models.PROTECT, related_name="credentials"
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    expires_at = models.DateTimeField(null=True, blank=True)
    allowed_domains = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "credentials"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner", "created_at"]),
            models.Index(fields=["status", "expires_at"]),
        ]

    def __str__(self):
        return self.key_string
