import logging
from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from meditracker import crud, models, schemas
from meditracker.api import deps
from meditracker.services.google_calendar import GoogleCalendarError, GoogleCalendarService

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_own_appointment(db: Session, appointment_id: int, user: models.User) -> models.Appointment:
    appointment = crud.appointment.get_for_user(db, id=appointment_id, user_id=user.id)
    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment


def _sync(calendar: GoogleCalendarService, db: Session, user: models.User, appointment: models.Appointment) -> None:
    if not user.google_calendar_connected:
        return
    try:
        calendar.sync_appointment(db, user, appointment)
    except GoogleCalendarError as e:
        # Local appointment stays; the user can re-save to retry the sync
        logger.error(f"❌ [GoogleCalendar] Sync failed for appointment {appointment.id}: {e}")


@router.post("", response_model=schemas.Appointment, status_code=status.HTTP_201_CREATED)
def create_appointment(
    *,
    db: Session = Depends(deps.get_db),
    appointment_in: schemas.AppointmentCreate,
    current_user: models.User = Depends(deps.get_current_active_user),
    calendar: GoogleCalendarService = Depends(deps.get_calendar),
) -> Any:
    """
    Create new appointment, mirrored to Google Calendar when linked.
    """
    appointment = crud.appointment.create_with_user(db=db, obj_in=appointment_in, user_id=current_user.id)
    _sync(calendar, db, current_user, appointment)
    return schemas.Appointment.from_model(appointment)


@router.get("", response_model=List[schemas.Appointment])
def read_appointments(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    appointments = crud.appointment.get_user_appointments(db, user_id=current_user.id, skip=skip, limit=limit)
    return [schemas.Appointment.from_model(a) for a in appointments]


@router.get("/{appointment_id}", response_model=schemas.Appointment)
def read_appointment(
    *,
    db: Session = Depends(deps.get_db),
    appointment_id: int,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    return schemas.Appointment.from_model(_get_own_appointment(db, appointment_id, current_user))


@router.put("/{appointment_id}", response_model=schemas.Appointment)
def update_appointment(
    *,
    db: Session = Depends(deps.get_db),
    appointment_id: int,
    appointment_in: schemas.AppointmentUpdate,
    current_user: models.User = Depends(deps.get_current_active_user),
    calendar: GoogleCalendarService = Depends(deps.get_calendar),
) -> Any:
    """
    Update an appointment. Moving it or changing the lead time re-arms the reminder.
    """
    appointment = _get_own_appointment(db, appointment_id, current_user)
    appointment = crud.appointment.update_appointment(db, db_obj=appointment, obj_in=appointment_in)
    _sync(calendar, db, current_user, appointment)
    return schemas.Appointment.from_model(appointment)


@router.delete("/{appointment_id}", response_model=schemas.Message)
def delete_appointment(
    *,
    db: Session = Depends(deps.get_db),
    appointment_id: int,
    current_user: models.User = Depends(deps.get_current_active_user),
    calendar: GoogleCalendarService = Depends(deps.get_calendar),
) -> Any:
    appointment = _get_own_appointment(db, appointment_id, current_user)
    try:
        calendar.remove_appointment(db, current_user, appointment)
    except GoogleCalendarError as e:
        logger.error(f"❌ [GoogleCalendar] Could not remove event for appointment {appointment.id}: {e}")
    crud.appointment.remove(db, db_obj=appointment)
    return {"message": "Appointment deleted successfully"}
