"""Appointment reminder pipeline (scanner, dispatcher, Celery beat task).

Celery beat triggers `reminders.scan_and_dispatch` on a fixed interval. Each
pass selects appointments whose reminder is due, claims each one with an
atomic conditional update, and emails the owner unless their Google
Calendar is linked.
"""
