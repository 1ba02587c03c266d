import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Protocol

from meditracker.utils.timezone import format_local, utcnow
from .config import settings
from .metrics import (
    reminders_due_total,
    reminders_failed_total,
    reminders_sent_total,
    reminders_skipped_total,
    reminders_suppressed_total,
    scheduler_scans_total,
)
from .repository import DueReminder, ReminderRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class EmailSender(Protocol):
    def send_email(self, to_email: str, subject: str, text_content: str) -> None: ...


@dataclass
class DispatchReport:
    scanned: int = 0
    sent: int = 0
    suppressed: int = 0
    failed: int = 0
    skipped: int = 0


def render_reminder_body(reminder: DueReminder, tz_name: Optional[str] = None) -> str:
    return (
        "Hello,\n\n"
        f"This is a reminder that you have an appointment with {reminder.doctor_name} "
        f"scheduled for {format_local(reminder.appointment_date, tz_name)}.\n\n"
        f"Reason: {reminder.reason or 'Not specified'}\n\n"
        "Please make sure to attend your appointment on time.\n\n"
        "Best regards,\n"
        "MediTracker Team"
    )


class ReminderDispatcher:
    """
    One scan-and-dispatch pass over due appointment reminders.

    Every collaborator is injected (repository, email sender, clock) so a pass
    can run against a test database with a fixed time. Each appointment is
    claimed with an atomic conditional update before anything is sent, which
    keeps overlapping passes from emailing twice.

    With ``mark_sent_on_failure`` off (the default) a failed email releases the
    claim and the appointment is retried on the next pass. Turned on, a failed
    appointment stays marked as sent and is never retried.
    """

    def __init__(
        self,
        repository: ReminderRepository,
        email_sender: EmailSender,
        clock: Clock = utcnow,
        mark_sent_on_failure: bool = False,
        subject: Optional[str] = None,
        batch_size: int = 0,
        timezone_name: Optional[str] = None,
    ):
        self.repository = repository
        self.email_sender = email_sender
        self.clock = clock
        self.mark_sent_on_failure = mark_sent_on_failure
        self.subject = subject or settings.EMAIL_SUBJECT
        self.batch_size = batch_size
        self.timezone_name = timezone_name

    def run_once(self) -> DispatchReport:
        report = DispatchReport()
        now = self.clock()
        # Store errors here abort the pass; the next tick retries
        due = self.repository.find_due(now, limit=self.batch_size)
        scheduler_scans_total.inc()
        report.scanned = len(due)
        reminders_due_total.inc(len(due))
        logger.info(f"🔍 [Reminders] Found {len(due)} appointments needing reminders")

        for reminder in due:
            try:
                self.dispatch(reminder, report)
            except Exception:
                # One bad row must not stop the batch
                report.failed += 1
                reminders_failed_total.inc()
                logger.exception(f"❌ [Reminders] Unexpected error for appointment {reminder.appointment_id}")

        logger.info(
            f"📧 [Reminders] Pass done | scanned={report.scanned} sent={report.sent} "
            f"suppressed={report.suppressed} failed={report.failed} skipped={report.skipped}"
        )
        return report

    def dispatch(self, reminder: DueReminder, report: DispatchReport) -> None:
        sent_at = self.clock()
        if not self.repository.claim(reminder.appointment_id, sent_at):
            report.skipped += 1
            reminders_skipped_total.inc()
            logger.info(f"⏭️ [Reminders] Appointment {reminder.appointment_id} already handled by another pass")
            return

        if reminder.calendar_connected:
            report.suppressed += 1
            reminders_suppressed_total.inc()
            logger.info(
                f"⏭️ [Reminders] Skipping email for {reminder.user_email} - Google Calendar connected"
            )
            return

        try:
            self.email_sender.send_email(
                reminder.user_email,
                self.subject,
                render_reminder_body(reminder, self.timezone_name),
            )
        except Exception as e:
            report.failed += 1
            reminders_failed_total.inc()
            logger.error(
                f"❌ [Reminders] Failed to send reminder for appointment {reminder.appointment_id} "
                f"to {reminder.user_email}: {e}"
            )
            if not self.mark_sent_on_failure:
                self.repository.release(reminder.appointment_id, sent_at)
            return

        report.sent += 1
        reminders_sent_total.inc()
        logger.info(
            f"✅ [Reminders] Email reminder sent to {reminder.user_email} "
            f"for appointment with {reminder.doctor_name}"
        )
