from prometheus_client import Counter


scheduler_scans_total = Counter(
    "reminder_scheduler_scans_total",
    "Total scheduler scan cycles",
)

reminders_due_total = Counter(
    "reminders_due_total",
    "Total appointments found due for a reminder",
)

reminders_sent_total = Counter(
    "reminders_email_sent_total",
    "Total reminder emails sent",
)

reminders_suppressed_total = Counter(
    "reminders_suppressed_total",
    "Total reminders not emailed because the user's Google Calendar is linked",
)

reminders_failed_total = Counter(
    "reminders_email_failed_total",
    "Total reminder emails that failed to send",
)

reminders_skipped_total = Counter(
    "reminders_skipped_total",
    "Total reminders already claimed by another pass",
)

calendar_synced_total = Counter(
    "calendar_events_synced_total",
    "Total appointments written to Google Calendar",
)

calendar_sync_failed_total = Counter(
    "calendar_sync_failed_total",
    "Total failed Google Calendar calls",
)
