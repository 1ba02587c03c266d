from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from meditracker import crud, models, schemas
from meditracker.api import deps

router = APIRouter()


@router.post("", response_model=schemas.MedicineEnvelope, status_code=status.HTTP_201_CREATED)
def add_medicine(
    *,
    db: Session = Depends(deps.get_db),
    medicine_in: schemas.MedicineCreate,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    medicine = crud.medicine.create_for_user(db, obj_in=medicine_in, user_id=current_user.id)
    return {"message": "Medicine added successfully", "data": medicine}


@router.get("", response_model=List[schemas.Medicine])
def read_medicines(
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    """
    Active medicines for the current user, newest first.
    """
    return crud.medicine.get_active_for_user(db, user_id=current_user.id)


@router.put("/{medicine_id}", response_model=schemas.MedicineEnvelope)
def update_medicine(
    *,
    db: Session = Depends(deps.get_db),
    medicine_id: int,
    medicine_in: schemas.MedicineUpdate,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    medicine = crud.medicine.get_active(db, id=medicine_id, user_id=current_user.id)
    if not medicine:
        raise HTTPException(status_code=404, detail="Medicine not found")
    medicine = crud.medicine.update(db, db_obj=medicine, obj_in=medicine_in)
    return {"message": "Medicine updated successfully", "data": medicine}


@router.delete("/{medicine_id}", response_model=schemas.Message)
def delete_medicine(
    *,
    db: Session = Depends(deps.get_db),
    medicine_id: int,
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    medicine = crud.medicine.get_active(db, id=medicine_id, user_id=current_user.id)
    if not medicine:
        raise HTTPException(status_code=404, detail="Medicine not found")
    crud.medicine.soft_delete(db, db_obj=medicine)
    return {"message": "Medicine deleted successfully"}
