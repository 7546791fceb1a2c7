"""
App configuration for the core app.
"""
import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    """Wires event handlers and tracing once all apps are loaded."""

    name = "core"
    verbose_name = "License Key Service Core"

    def ready(self):
        """Called when Django starts."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()

        if settings.OTEL_ENABLED:
            self.setup_observability()

    def setup_observability(self):
        """Setup OpenTelemetry; the service still runs without a collector."""
        try:
            from core.instrumentation import setup_opentelemetry

            setup_opentelemetry()
        except Exception as e:
            logger.warning("Failed to setup OpenTelemetry: %s", e)
