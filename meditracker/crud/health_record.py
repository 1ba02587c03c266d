from datetime import datetime
from typing import List
from sqlalchemy.orm import Session

from meditracker.crud.base import CRUDBase
from meditracker.models.health_record import HealthRecord
from meditracker.schemas.health_record import HealthRecordCreate
from meditracker.utils.timezone import to_utc_naive


class CRUDHealthRecord(CRUDBase[HealthRecord, HealthRecordCreate, HealthRecordCreate]):
    def create_for_user(self, db: Session, *, obj_in: HealthRecordCreate, user_id: int) -> HealthRecord:
        db_obj = HealthRecord(
            user_id=user_id,
            title=obj_in.title,
            description=obj_in.description,
            date=to_utc_naive(obj_in.date) or datetime.utcnow(),
            file_url=obj_in.file_url,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def list_for_user(self, db: Session, *, user_id: int, skip: int = 0, limit: int = 100) -> List[HealthRecord]:
        return (
            db.query(self.model)
            .filter(HealthRecord.user_id == user_id)
            .order_by(HealthRecord.date.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )


health_record = CRUDHealthRecord(HealthRecord)
