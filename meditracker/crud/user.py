from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from meditracker.core.security import get_password_hash, verify_password
from meditracker.models.user import User
from meditracker.schemas.user import UserCreate


class CRUDUser:
    def create(self, db: Session, *, obj_in: UserCreate) -> User:
        db_obj = User(
            email=obj_in.email.lower(),
            hashed_password=get_password_hash(obj_in.password),
            name=obj_in.name,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get(self, db: Session, id: int) -> Optional[User]:
        return db.query(User).filter(User.id == id).first()

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.lower()).first()

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email=email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def is_active(self, user: User) -> bool:
        return user.is_active

    def mark_profile_completed(self, db: Session, *, db_obj: User) -> User:
        if not db_obj.profile_completed:
            db_obj.profile_completed = True
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
        return db_obj

    def connect_google_calendar(
        self,
        db: Session,
        *,
        db_obj: User,
        access_token: Optional[str],
        refresh_token: Optional[str],
        token_expiry: Optional[datetime],
    ) -> User:
        db_obj.google_calendar_connected = True
        db_obj.google_calendar_access_token = access_token
        # Google only returns a refresh token on first consent; keep the old one otherwise
        if refresh_token:
            db_obj.google_calendar_refresh_token = refresh_token
        db_obj.google_calendar_connected_at = datetime.utcnow()
        db_obj.google_calendar_token_expiry = token_expiry
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update_google_tokens(
        self, db: Session, *, db_obj: User, access_token: Optional[str], token_expiry: Optional[datetime]
    ) -> User:
        db_obj.google_calendar_access_token = access_token
        db_obj.google_calendar_token_expiry = token_expiry
        db.add(db_obj)
        db.commit()
        return db_obj

    def disconnect_google_calendar(self, db: Session, *, db_obj: User) -> User:
        db_obj.google_calendar_connected = False
        db_obj.google_calendar_access_token = None
        db_obj.google_calendar_refresh_token = None
        db_obj.google_calendar_token_expiry = None
        db_obj.google_calendar_connected_at = None
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


# Create instance that can be imported directly
user = CRUDUser()
