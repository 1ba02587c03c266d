from datetime import datetime, timedelta

from meditracker.models import Appointment
from meditracker.reminders.repository import is_due
from tests.conftest import TestingSessionLocal, make_appointment, make_user

APPOINTMENT_AT = datetime(2025, 1, 10, 10, 0, 0)


def _last_sent(appointment_id):
    with TestingSessionLocal() as session:
        return session.get(Appointment, appointment_id).reminder_last_sent


def test_is_due_boundaries():
    assert is_due(APPOINTMENT_AT, 60, datetime(2025, 1, 10, 9, 0, 0))
    assert is_due(APPOINTMENT_AT, 60, datetime(2025, 1, 10, 9, 0, 1))
    assert not is_due(APPOINTMENT_AT, 60, datetime(2025, 1, 10, 8, 59, 59))
    assert is_due(APPOINTMENT_AT, 60, APPOINTMENT_AT)
    assert not is_due(APPOINTMENT_AT, 60, APPOINTMENT_AT + timedelta(seconds=1))


def test_find_due_selects_appointment_inside_window(db, repository):
    user = make_user(db)
    appointment = make_appointment(db, user)

    due = repository.find_due(datetime(2025, 1, 10, 9, 0, 1))

    assert [d.appointment_id for d in due] == [appointment.id]
    assert due[0].user_email == "patient@example.com"
    assert due[0].calendar_connected is False
    assert due[0].trigger_at == datetime(2025, 1, 10, 9, 0, 0)


def test_find_due_skips_before_trigger(db, repository):
    user = make_user(db)
    make_appointment(db, user)

    assert repository.find_due(datetime(2025, 1, 10, 8, 59, 59)) == []


def test_find_due_ignores_disabled_past_and_sent(db, repository):
    user = make_user(db)
    make_appointment(db, user, enabled=False)
    make_appointment(db, user, when=datetime(2025, 1, 10, 8, 0, 0))
    make_appointment(db, user, last_sent=datetime(2025, 1, 10, 8, 30, 0))

    assert repository.find_due(datetime(2025, 1, 10, 9, 0, 1)) == []


def test_find_due_accepts_aware_now(db, repository, clock):
    user = make_user(db)
    make_appointment(db, user)

    assert len(repository.find_due(clock())) == 1


def test_find_due_honours_long_lead_times(db, repository):
    user = make_user(db)
    appointment = make_appointment(db, user, when=datetime(2025, 2, 1, 10, 0, 0), time_before=40320)

    due = repository.find_due(datetime(2025, 1, 5, 10, 0, 0))

    assert [d.appointment_id for d in due] == [appointment.id]


def test_find_due_respects_limit(db, repository):
    user = make_user(db)
    for minute in range(3):
        make_appointment(db, user, when=datetime(2025, 1, 10, 9, 30 + minute, 0))

    due = repository.find_due(datetime(2025, 1, 10, 9, 0, 1), limit=2)

    assert len(due) == 2
    assert due[0].appointment_date < due[1].appointment_date


def test_claim_is_exclusive(db, repository):
    user = make_user(db)
    appointment = make_appointment(db, user)
    sent_at = datetime(2025, 1, 10, 9, 0, 1)

    assert repository.claim(appointment.id, sent_at) is True
    assert repository.claim(appointment.id, sent_at + timedelta(seconds=5)) is False
    assert _last_sent(appointment.id) == sent_at


def test_release_only_reverts_own_claim(db, repository):
    user = make_user(db)
    appointment = make_appointment(db, user)
    sent_at = datetime(2025, 1, 10, 9, 0, 1)
    repository.claim(appointment.id, sent_at)

    assert repository.release(appointment.id, sent_at + timedelta(seconds=1)) is False
    assert _last_sent(appointment.id) == sent_at

    assert repository.release(appointment.id, sent_at) is True
    assert _last_sent(appointment.id) is None
