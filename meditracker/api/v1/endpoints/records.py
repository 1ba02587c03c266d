from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from meditracker import crud, models, schemas
from meditracker.api import deps
from meditracker.utils.timezone import utcnow

router = APIRouter()


@router.get("/summary", response_model=schemas.RecordSummary)
def read_record_summary(
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    """
    Aggregated health record for PDF export.
    """
    appointments = crud.appointment.get_user_appointments(db, user_id=current_user.id, limit=1000)
    return schemas.RecordSummary(
        generated_at=utcnow(),
        user=schemas.User.model_validate(current_user),
        details=crud.user_details.get_by_user(db, user_id=current_user.id),
        appointments=[schemas.Appointment.from_model(a) for a in appointments],
        medicines=crud.medicine.get_active_for_user(db, user_id=current_user.id),
        health_records=crud.health_record.list_for_user(db, user_id=current_user.id, limit=1000),
    )
