from typing import Any
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from meditracker import crud, models, schemas
from meditracker.api import deps

router = APIRouter()


@router.post("", response_model=schemas.UserDetails)
def create_or_update_details(
    *,
    db: Session = Depends(deps.get_db),
    details_in: schemas.UserDetailsIn,
    response: Response,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    """
    Create the caller's details (201) or replace the existing ones (200).
    """
    details, created = crud.user_details.create_or_update(db, obj_in=details_in, user_id=current_user.id)
    if created:
        crud.user.mark_profile_completed(db, db_obj=current_user)
        response.status_code = status.HTTP_201_CREATED
    return details


@router.get("", response_model=schemas.UserDetails)
def read_details(
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    details = crud.user_details.get_by_user(db, user_id=current_user.id)
    if not details:
        raise HTTPException(status_code=404, detail="No details found")
    return details
