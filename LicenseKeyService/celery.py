"""
Celery configuration for background tasks.

Used for retrying audit writes that failed on the validation hot path.
"""
import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicenseKeyService.settings.dev")

app = Celery("LicenseKeyService")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()
