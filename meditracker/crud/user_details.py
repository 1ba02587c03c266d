from typing import Optional, Tuple
from sqlalchemy.orm import Session

from meditracker.models.user_details import UserDetails
from meditracker.schemas.user_details import UserDetailsIn


class CRUDUserDetails:
    def get_by_user(self, db: Session, *, user_id: int) -> Optional[UserDetails]:
        return db.query(UserDetails).filter(UserDetails.user_id == user_id).first()

    def create_or_update(self, db: Session, *, obj_in: UserDetailsIn, user_id: int) -> Tuple[UserDetails, bool]:
        """Upsert the user's details. Returns (details, created)."""
        data = obj_in.model_dump(mode="json")
        # Dates go back to the model as date objects, JSON columns keep plain values
        for field in ("date_of_birth", "valid_till"):
            data[field] = getattr(obj_in, field)

        existing = self.get_by_user(db, user_id=user_id)
        if existing:
            for field, value in data.items():
                setattr(existing, field, value)
            db.add(existing)
            db.commit()
            db.refresh(existing)
            return existing, False

        db_obj = UserDetails(**data, user_id=user_id)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj, True


user_details = CRUDUserDetails()
