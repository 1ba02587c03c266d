"""
MediTracker Backend Application Package

Personal health-record API: accounts, medical details, appointments with
email/Google Calendar reminders, medicine schedules and record export.
"""
