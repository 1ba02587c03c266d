from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from meditracker.crud.base import CRUDBase
from meditracker.models.appointment import Appointment
from meditracker.schemas.appointment import AppointmentCreate, AppointmentUpdate
from meditracker.utils.timezone import to_utc_naive


class CRUDAppointment(CRUDBase[Appointment, AppointmentCreate, AppointmentUpdate]):
    def create_with_user(self, db: Session, *, obj_in: AppointmentCreate, user_id: int) -> Appointment:
        reminder = obj_in.reminder
        db_obj = Appointment(
            user_id=user_id,
            doctor_name=obj_in.doctor_name,
            appointment_date=to_utc_naive(obj_in.appointment_date),
            reason=obj_in.reason,
            reminder_enabled=reminder.enabled,
            reminder_type=reminder.type,
            reminder_time_before=reminder.time_before,
            reminder_start_from=to_utc_naive(reminder.start_from),
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_user_appointments(
        self, db: Session, *, user_id: int, skip: int = 0, limit: int = 100
    ) -> List[Appointment]:
        return (
            db.query(self.model)
            .filter(Appointment.user_id == user_id)
            .order_by(Appointment.appointment_date.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def update_appointment(self, db: Session, *, db_obj: Appointment, obj_in: AppointmentUpdate) -> Appointment:
        obj_data = obj_in.model_dump(exclude_unset=True)
        reminder_data = obj_data.pop("reminder", None) or {}
        reschedule = False

        if "appointment_date" in obj_data and obj_data["appointment_date"] is not None:
            new_date = to_utc_naive(obj_data["appointment_date"])
            reschedule = new_date != db_obj.appointment_date
            obj_data["appointment_date"] = new_date

        for field, value in obj_data.items():
            # Required columns: an explicit null leaves the stored value alone
            if field in ("doctor_name", "appointment_date") and value is None:
                continue
            setattr(db_obj, field, value)

        for key, value in reminder_data.items():
            if value is None and key != "start_from":
                continue
            if key == "time_before" and value != db_obj.reminder_time_before:
                reschedule = True
            if key == "enabled" and value and not db_obj.reminder_enabled:
                reschedule = True
            if key == "start_from":
                value = to_utc_naive(value)
            setattr(db_obj, f"reminder_{key}", value)

        # A moved appointment deserves a fresh reminder
        if reschedule:
            db_obj.reminder_last_sent = None

        db_obj.updated_at = datetime.utcnow()
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def mark_synced(self, db: Session, *, db_obj: Appointment, event_id: Optional[str]) -> Appointment:
        db_obj.google_event_id = event_id
        db_obj.google_synced = event_id is not None
        db_obj.google_last_synced = datetime.utcnow() if event_id else None
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


appointment = CRUDAppointment(Appointment)
