from datetime import datetime, timedelta
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Boolean, Index
from sqlalchemy.orm import relationship
from meditracker.db.base import Base

REMINDER_TYPES = ("one-time", "daily", "weekly", "monthly")
# Four weeks; also the longest popup reminder Google Calendar accepts
MAX_REMINDER_LEAD_MINUTES = 40320


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    doctor_name = Column(String, nullable=False)
    appointment_date = Column(DateTime, nullable=False)  # UTC-naive
    reason = Column(Text, nullable=True)

    # Google Calendar sync
    google_event_id = Column(String, nullable=True)
    google_synced = Column(Boolean, default=False, nullable=False)
    google_last_synced = Column(DateTime, nullable=True)

    # Reminder
    reminder_enabled = Column(Boolean, default=False, nullable=False)
    reminder_type = Column(String, default="one-time", nullable=False)
    reminder_time_before = Column(Integer, default=60, nullable=False)  # minutes
    reminder_start_from = Column(DateTime, nullable=True)
    reminder_last_sent = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="appointments")

    __table_args__ = (
        Index("ix_appointments_reminder_scan", "reminder_enabled", "reminder_last_sent", "appointment_date"),
    )

    @property
    def reminder_trigger_at(self) -> datetime:
        """Moment the reminder becomes due (appointment time minus lead time)."""
        return self.appointment_date - timedelta(minutes=self.reminder_time_before or 0)
