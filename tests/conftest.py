import os

# Must be set before meditracker modules read their settings
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "development"
os.environ["REMINDER_ENABLED"] = "false"
os.environ["SMTP_SERVER"] = "smtp.test.local"
os.environ["SMTP_USERNAME"] = "reminders@meditracker.test"
os.environ["SMTP_PASSWORD"] = "secret"

from datetime import datetime, timezone
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from meditracker import crud, models
from meditracker.api import deps
from meditracker.db.base import Base
from meditracker.main import app
from meditracker.reminders.dispatcher import ReminderDispatcher
from meditracker.reminders.repository import ReminderRepository
from meditracker.schemas.user import UserCreate
from meditracker.services.email_service import EmailDeliveryError
from meditracker.services.google_calendar import GoogleCalendarError

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

FIXED_NOW = datetime(2025, 1, 10, 9, 0, 1, tzinfo=timezone.utc)


class FakeEmailSender:
    def __init__(self, fail_for=()):
        self.sent: List[tuple] = []
        self.fail_for = set(fail_for)

    def send_email(self, to_email: str, subject: str, text_content: str) -> None:
        if to_email in self.fail_for:
            raise EmailDeliveryError(f"SMTP rejected {to_email}")
        self.sent.append((to_email, subject, text_content))


class FakeCalendar:
    def __init__(self):
        self.synced: List[int] = []
        self.removed: List[int] = []
        self.fail = False

    def sync_appointment(self, db, user, appointment) -> Optional[str]:
        if self.fail:
            raise GoogleCalendarError("calendar unavailable")
        event_id = f"evt-{appointment.id}"
        crud.appointment.mark_synced(db, db_obj=appointment, event_id=event_id)
        self.synced.append(appointment.id)
        return event_id

    def remove_appointment(self, db, user, appointment) -> None:
        if appointment.google_event_id:
            self.removed.append(appointment.id)


class FixedClock:
    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def email_sender():
    return FakeEmailSender()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def repository():
    return ReminderRepository(session_factory=TestingSessionLocal)


@pytest.fixture
def dispatcher(repository, email_sender, clock):
    return ReminderDispatcher(
        repository=repository,
        email_sender=email_sender,
        clock=clock,
        timezone_name="UTC",
    )


@pytest.fixture
def calendar():
    return FakeCalendar()


@pytest.fixture
def client(calendar):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_calendar] = lambda: calendar
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db, email: str = "patient@example.com", password: str = "secret123", calendar: bool = False) -> models.User:
    user = crud.user.create(db, obj_in=UserCreate(email=email, password=password, name="Pat"))
    if calendar:
        crud.user.connect_google_calendar(
            db, db_obj=user, access_token="token", refresh_token="refresh", token_expiry=None
        )
    return user


def make_appointment(
    db,
    user: models.User,
    when: datetime = datetime(2025, 1, 10, 10, 0, 0),
    time_before: int = 60,
    enabled: bool = True,
    last_sent: Optional[datetime] = None,
    doctor_name: str = "Dr. Smith",
    reason: Optional[str] = "Annual checkup",
) -> models.Appointment:
    appointment = models.Appointment(
        user_id=user.id,
        doctor_name=doctor_name,
        appointment_date=when,
        reason=reason,
        reminder_enabled=enabled,
        reminder_time_before=time_before,
        reminder_last_sent=last_sent,
    )
    db.add(appointment)
    db.commit()
    db.refresh(appointment)
    return appointment


def auth_headers(client: TestClient, email: str = "patient@example.com", password: str = "secret123") -> dict:
    client.post("/api/v1/auth/register", json={"email": email, "password": password, "name": "Pat"})
    response = client.post("/api/v1/auth/login", data={"username": email, "password": password})
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}
