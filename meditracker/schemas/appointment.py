from typing import Literal, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from meditracker.models.appointment import MAX_REMINDER_LEAD_MINUTES

ReminderType = Literal["one-time", "daily", "weekly", "monthly"]


class ReminderSettings(BaseModel):
    enabled: bool = False
    type: ReminderType = "one-time"
    time_before: int = Field(60, gt=0, le=MAX_REMINDER_LEAD_MINUTES, description="Minutes before the appointment")
    start_from: Optional[datetime] = None


class ReminderSettingsUpdate(BaseModel):
    enabled: Optional[bool] = None
    type: Optional[ReminderType] = None
    time_before: Optional[int] = Field(None, gt=0, le=MAX_REMINDER_LEAD_MINUTES)
    start_from: Optional[datetime] = None


class ReminderState(ReminderSettings):
    last_sent: Optional[datetime] = None


class GoogleCalendarSync(BaseModel):
    event_id: Optional[str] = None
    synced: bool = False
    last_synced: Optional[datetime] = None


# Shared properties
class AppointmentBase(BaseModel):
    doctor_name: str = Field(..., min_length=1)
    appointment_date: datetime
    reason: Optional[str] = None


# Properties to receive on appointment creation
class AppointmentCreate(AppointmentBase):
    reminder: ReminderSettings = ReminderSettings()


# Properties to receive on appointment update
class AppointmentUpdate(BaseModel):
    doctor_name: Optional[str] = Field(None, min_length=1)
    appointment_date: Optional[datetime] = None
    reason: Optional[str] = None
    reminder: Optional[ReminderSettingsUpdate] = None


# Properties to return to client
class Appointment(AppointmentBase):
    id: int
    user_id: int
    reminder: ReminderState
    google_calendar: GoogleCalendarSync
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, obj) -> "Appointment":
        return cls(
            id=obj.id,
            user_id=obj.user_id,
            doctor_name=obj.doctor_name,
            appointment_date=obj.appointment_date,
            reason=obj.reason,
            reminder=ReminderState(
                enabled=obj.reminder_enabled,
                type=obj.reminder_type,
                time_before=obj.reminder_time_before,
                start_from=obj.reminder_start_from,
                last_sent=obj.reminder_last_sent,
            ),
            google_calendar=GoogleCalendarSync(
                event_id=obj.google_event_id,
                synced=obj.google_synced,
                last_synced=obj.google_last_synced,
            ),
            created_at=obj.created_at,
            updated_at=obj.updated_at,
        )
