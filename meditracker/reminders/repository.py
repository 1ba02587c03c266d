from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from meditracker.core.database_utils import get_db_session
from meditracker.models.appointment import MAX_REMINDER_LEAD_MINUTES, Appointment
from meditracker.models.user import User
from meditracker.utils.timezone import to_utc_naive


@dataclass(frozen=True)
class DueReminder:
    """Snapshot of an appointment whose reminder should fire now."""
    appointment_id: int
    user_id: int
    user_email: str
    calendar_connected: bool
    doctor_name: str
    appointment_date: datetime  # UTC-naive
    reason: Optional[str]
    time_before: int

    @property
    def trigger_at(self) -> datetime:
        return self.appointment_date - timedelta(minutes=self.time_before)


def is_due(appointment_date: datetime, time_before: int, now: datetime) -> bool:
    """Future appointment whose trigger instant (date minus lead time) has passed."""
    return appointment_date >= now and appointment_date - timedelta(minutes=time_before) <= now


class ReminderRepository:
    """Reads due reminders and records dispatch on the appointments table."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        self.session_factory = session_factory

    def find_due(self, now: datetime, limit: int = 0) -> List[DueReminder]:
        now = to_utc_naive(now)
        # Lead times are capped, so nothing further out than the cap can be due yet
        horizon = now + timedelta(minutes=MAX_REMINDER_LEAD_MINUTES)
        stmt = (
            select(Appointment, User.email, User.google_calendar_connected)
            .join(User, User.id == Appointment.user_id)
            .where(Appointment.reminder_enabled.is_(True))
            .where(Appointment.reminder_last_sent.is_(None))
            .where(Appointment.appointment_date >= now)
            .where(Appointment.appointment_date <= horizon)
            .order_by(Appointment.appointment_date.asc())
        )
        due: List[DueReminder] = []
        with get_db_session(self.session_factory) as db:
            for appt, email, connected in db.execute(stmt):
                if not is_due(appt.appointment_date, appt.reminder_time_before, now):
                    continue
                due.append(
                    DueReminder(
                        appointment_id=appt.id,
                        user_id=appt.user_id,
                        user_email=email,
                        calendar_connected=bool(connected),
                        doctor_name=appt.doctor_name,
                        appointment_date=appt.appointment_date,
                        reason=appt.reason,
                        time_before=appt.reminder_time_before,
                    )
                )
                if limit and len(due) >= limit:
                    break
        return due

    def claim(self, appointment_id: int, sent_at: datetime) -> bool:
        """Set reminder_last_sent only if it is still unset. False means another pass got there first."""
        stmt = (
            update(Appointment)
            .where(Appointment.id == appointment_id)
            .where(Appointment.reminder_last_sent.is_(None))
            .values(reminder_last_sent=to_utc_naive(sent_at))
            .execution_options(synchronize_session=False)
        )
        with get_db_session(self.session_factory) as db:
            result = db.execute(stmt)
            return result.rowcount == 1

    def release(self, appointment_id: int, sent_at: datetime) -> bool:
        """Undo our own claim so the next pass retries the appointment."""
        stmt = (
            update(Appointment)
            .where(Appointment.id == appointment_id)
            .where(Appointment.reminder_last_sent == to_utc_naive(sent_at))
            .values(reminder_last_sent=None)
            .execution_options(synchronize_session=False)
        )
        with get_db_session(self.session_factory) as db:
            result = db.execute(stmt)
            return result.rowcount == 1
