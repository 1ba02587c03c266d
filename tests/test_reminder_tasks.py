from meditracker.reminders import tasks
from meditracker.reminders.celery_app import celery_app
from meditracker.reminders.dispatcher import ReminderDispatcher
from meditracker.services.email_service import EmailConfigurationError
from tests.conftest import make_appointment, make_user


def test_task_is_a_noop_when_disabled(monkeypatch):
    monkeypatch.setattr(tasks.settings, "ENABLED", False)

    def fail():
        raise AssertionError("dispatcher must not be built when reminders are disabled")

    monkeypatch.setattr(tasks, "build_dispatcher", fail)

    assert tasks.scan_and_dispatch_task() == {}


def test_task_runs_a_pass_and_returns_report(monkeypatch, db, repository, email_sender, clock):
    user = make_user(db)
    make_appointment(db, user)
    monkeypatch.setattr(tasks.settings, "ENABLED", True)
    monkeypatch.setattr(
        tasks,
        "build_dispatcher",
        lambda: ReminderDispatcher(repository=repository, email_sender=email_sender, clock=clock),
    )

    result = tasks.scan_and_dispatch_task()

    assert result == {"scanned": 1, "sent": 1, "suppressed": 0, "failed": 0, "skipped": 0}
    assert len(email_sender.sent) == 1


def test_task_skips_pass_without_smtp_settings(monkeypatch):
    monkeypatch.setattr(tasks.settings, "ENABLED", True)

    def broken():
        raise EmailConfigurationError("Missing email configuration: SMTP_SERVER")

    monkeypatch.setattr(tasks, "build_dispatcher", broken)

    assert tasks.scan_and_dispatch_task() == {}


def test_beat_schedules_scan_every_interval():
    entry = celery_app.conf.beat_schedule["scan-and-dispatch"]

    assert entry["task"] == "reminders.scan_and_dispatch"
    assert entry["schedule"] == tasks.settings.SCAN_INTERVAL_SECONDS
