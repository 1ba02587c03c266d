from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from meditracker import crud, models, schemas
from meditracker.api import deps

router = APIRouter()


@router.post("", response_model=schemas.HealthRecord, status_code=status.HTTP_201_CREATED)
def create_health_record(
    *,
    db: Session = Depends(deps.get_db),
    record_in: schemas.HealthRecordCreate,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    return crud.health_record.create_for_user(db, obj_in=record_in, user_id=current_user.id)


@router.get("", response_model=List[schemas.HealthRecord])
def read_health_records(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    return crud.health_record.list_for_user(db, user_id=current_user.id, skip=skip, limit=limit)
