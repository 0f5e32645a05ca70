"""
Django app configuration for talon-django.
"""

import logging

from django.apps import AppConfig as BaseAppConfig

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Registers the resources declared by installed apps."""

    name = "talon_django"
    verbose_name = "Talon"
    label = "talon_django"

    def ready(self):
        from .settings import ConcernSettings

        if not ConcernSettings.from_concern(None).autodiscover:
            logger.debug("Resource autodiscovery disabled")
            return

        from .registry import autodiscover

        # Configuration errors abort startup: a resource that failed to
        # resolve must not be served.
        autodiscover()
        logger.info("Talon resources registered")
