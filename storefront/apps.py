from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _
import logging

logger = logging.getLogger(__name__)


class StorefrontConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "storefront"
    verbose_name = _("Storefront")

    def ready(self):
        """
        With AUTO_MIGRATE_ON_STARTUP on, try to apply migrations.
        If DB is not ready, log the error but don't crash the app.
        """
        from django.conf import settings

        if not settings.AUTO_MIGRATE_ON_STARTUP:
            return

        from django.core.management import call_command
        from django.db.utils import OperationalError, ProgrammingError

        try:
            call_command("migrate", interactive=False)
            logger.info("Auto-migrate executed successfully on startup.")
        except (OperationalError, ProgrammingError) as e:
            logger.error("Auto-migrate failed due to DB error: %s", e)
