from typing import List, Optional
from sqlalchemy.orm import Session

from meditracker.crud.base import CRUDBase
from meditracker.models.medicine import Medicine
from meditracker.schemas.medicine import MedicineCreate, MedicineUpdate


class CRUDMedicine(CRUDBase[Medicine, MedicineCreate, MedicineUpdate]):
    def get_active_for_user(self, db: Session, *, user_id: int) -> List[Medicine]:
        return (
            db.query(self.model)
            .filter(Medicine.user_id == user_id, Medicine.is_active.is_(True))
            .order_by(Medicine.created_at.desc(), Medicine.id.desc())
            .all()
        )

    def get_active(self, db: Session, *, id: int, user_id: int) -> Optional[Medicine]:
        return (
            db.query(self.model)
            .filter(Medicine.id == id, Medicine.user_id == user_id, Medicine.is_active.is_(True))
            .first()
        )

    def update(self, db: Session, *, db_obj: Medicine, obj_in: MedicineUpdate) -> Medicine:
        update_data = obj_in.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def soft_delete(self, db: Session, *, db_obj: Medicine) -> Medicine:
        db_obj.is_active = False
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


medicine = CRUDMedicine(Medicine)
