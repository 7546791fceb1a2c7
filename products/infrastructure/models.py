"""
Product model.
"""
import uuid

from django.db import models


class Product(models.Model):
    """
    A product license keys are issued for.

    Credentials reference products; products are never deleted while
    referenced.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, help_text="Product display name")
    slug = models.SlugField(max_length=100, unique=True, help_text="URL-safe identifier")
    description = models.TextField(blank=True, default="")
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "products"
        ordering = ["name"]

    def __str__(self):
        return self.name
