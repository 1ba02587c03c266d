from celery import shared_task
from celery.utils.log import get_task_logger

from meditracker.core.config import settings as app_settings
from meditracker.services.email_service import EmailConfigurationError, EmailService
from .celery_app import celery_app  # noqa: F401  (binds shared tasks to this app)
from .config import settings
from .dispatcher import ReminderDispatcher
from .repository import ReminderRepository

logger = get_task_logger(__name__)


def build_dispatcher() -> ReminderDispatcher:
    return ReminderDispatcher(
        repository=ReminderRepository(),
        email_sender=EmailService(),
        mark_sent_on_failure=settings.MARK_SENT_ON_FAILURE,
        subject=settings.EMAIL_SUBJECT,
        batch_size=settings.BATCH_SIZE,
        timezone_name=app_settings.DEFAULT_TIMEZONE,
    )


@shared_task(name="reminders.scan_and_dispatch")
def scan_and_dispatch_task() -> dict:
    """Scan for due appointment reminders and dispatch them. Returns the pass report."""
    if not settings.ENABLED:
        logger.info("📧 [Reminders] Email reminders are disabled (REMINDER_ENABLED is not true)")
        return {}

    try:
        dispatcher = build_dispatcher()
    except EmailConfigurationError as e:
        logger.error(f"❌ [Reminders] Cannot start pass: {e}")
        return {}

    report = dispatcher.run_once()
    return vars(report)
