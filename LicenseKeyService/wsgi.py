"""
WSGI config for LicenseKeyService.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicenseKeyService.settings.dev")

application = get_wsgi_application()
