"""
Google Calendar integration.

Covers the OAuth consent flow (auth URL + code exchange) and mirroring
appointments into the user's calendar. Calendar failures never undo local
changes; callers log them and keep the appointment as-is.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlencode

import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error
from sqlalchemy.orm import Session

from meditracker import crud
from meditracker.core.config import settings
from meditracker.core.security import create_oauth_state
from meditracker.models.appointment import MAX_REMINDER_LEAD_MINUTES, Appointment
from meditracker.models.user import User
from meditracker.reminders.metrics import calendar_sync_failed_total, calendar_synced_total
from meditracker.utils.timezone import to_utc_aware, to_utc_naive

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar"]
TOKEN_URI = "https://oauth2.googleapis.com/token"
AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
TOKEN_TIMEOUT_SECONDS = 10

# execute() can also fail below the HTTP layer (timeouts, DNS, resets)
TRANSPORT_ERRORS = (GoogleAuthError, HttpLib2Error, OSError)


class GoogleCalendarError(Exception):
    """Raised when the OAuth exchange or a Calendar API call fails."""


def _require_client() -> None:
    if not settings.google_calendar_configured:
        raise GoogleCalendarError("Google Calendar OAuth client is not configured")


def get_authorization_url(user_id: int) -> str:
    """Consent URL asking for offline access; a signed user reference travels in `state`."""
    _require_client()
    params = {
        "client_id": settings.GOOGLE_CLIENT_ID,
        "redirect_uri": settings.GOOGLE_REDIRECT_URI,
        "response_type": "code",
        "scope": " ".join(SCOPES),
        "access_type": "offline",
        # Forces a refresh token even when the user consented before
        "prompt": "consent",
        "state": create_oauth_state(user_id),
    }
    return f"{AUTH_URI}?{urlencode(params)}"


def exchange_code(code: str) -> Tuple[Optional[str], Optional[str], Optional[datetime]]:
    """Exchange an authorization code for (access_token, refresh_token, expiry)."""
    _require_client()
    data = {
        "code": code,
        "client_id": settings.GOOGLE_CLIENT_ID,
        "client_secret": settings.GOOGLE_CLIENT_SECRET,
        "redirect_uri": settings.GOOGLE_REDIRECT_URI,
        "grant_type": "authorization_code",
    }
    try:
        r = requests.post(TOKEN_URI, data=data, timeout=TOKEN_TIMEOUT_SECONDS)
        r.raise_for_status()
        payload = r.json()
    except (requests.RequestException, ValueError) as e:
        raise GoogleCalendarError(f"Token exchange failed: {e}") from e

    expires_in = payload.get("expires_in")
    expiry = datetime.utcnow() + timedelta(seconds=int(expires_in)) if expires_in else None
    return payload.get("access_token"), payload.get("refresh_token"), expiry


def build_event_body(appointment: Appointment) -> Dict[str, Any]:
    start = to_utc_aware(appointment.appointment_date)
    end = start + timedelta(minutes=settings.GOOGLE_EVENT_DURATION_MINUTES)
    body: Dict[str, Any] = {
        "summary": f"Appointment with {appointment.doctor_name}",
        "description": appointment.reason or "",
        "start": {"dateTime": start.isoformat(), "timeZone": "UTC"},
        "end": {"dateTime": end.isoformat(), "timeZone": "UTC"},
    }
    if appointment.reminder_enabled:
        minutes = min(int(appointment.reminder_time_before), MAX_REMINDER_LEAD_MINUTES)
        body["reminders"] = {
            "useDefault": False,
            "overrides": [{"method": "popup", "minutes": minutes}],
        }
    else:
        body["reminders"] = {"useDefault": True}
    return body


class GoogleCalendarService:
    """Mirrors a user's appointments into their primary Google Calendar."""

    def __init__(self, calendar_id: Optional[str] = None):
        self.calendar_id = calendar_id or settings.GOOGLE_CALENDAR_ID

    def _credentials(self, db: Session, user: User) -> Credentials:
        creds = Credentials(
            token=user.google_calendar_access_token,
            refresh_token=user.google_calendar_refresh_token,
            token_uri=TOKEN_URI,
            client_id=settings.GOOGLE_CLIENT_ID,
            client_secret=settings.GOOGLE_CLIENT_SECRET,
            scopes=SCOPES,
        )
        creds.expiry = to_utc_naive(user.google_calendar_token_expiry)
        if creds.refresh_token and (not creds.token or creds.expired):
            try:
                creds.refresh(Request())
            except GoogleAuthError as e:
                raise GoogleCalendarError(f"Token refresh failed: {e}") from e
            crud.user.update_google_tokens(
                db, db_obj=user, access_token=creds.token, token_expiry=to_utc_naive(creds.expiry)
            )
            logger.info(f"🔄 [GoogleCalendar] Refreshed access token for user {user.id}")
        return creds

    def _events(self, db: Session, user: User):
        service = build("calendar", "v3", credentials=self._credentials(db, user), cache_discovery=False)
        return service.events()

    def sync_appointment(self, db: Session, user: User, appointment: Appointment) -> Optional[str]:
        """Insert or patch the calendar event for an appointment; returns the event id."""
        if not user.google_calendar_connected:
            return None
        body = build_event_body(appointment)
        try:
            events = self._events(db, user)
            if appointment.google_event_id:
                event = events.patch(
                    calendarId=self.calendar_id, eventId=appointment.google_event_id, body=body
                ).execute()
            else:
                event = events.insert(calendarId=self.calendar_id, body=body).execute()
        except (HttpError, *TRANSPORT_ERRORS) as e:
            calendar_sync_failed_total.inc()
            raise GoogleCalendarError(str(e)) from e
        calendar_synced_total.inc()
        event_id = event.get("id")
        crud.appointment.mark_synced(db, db_obj=appointment, event_id=event_id)
        logger.info(f"📅 [GoogleCalendar] Synced appointment {appointment.id} as event {event_id}")
        return event_id

    def remove_appointment(self, db: Session, user: User, appointment: Appointment) -> None:
        if not (user.google_calendar_connected and appointment.google_event_id):
            return
        try:
            self._events(db, user).delete(
                calendarId=self.calendar_id, eventId=appointment.google_event_id
            ).execute()
        except HttpError as e:
            # Already gone on Google's side
            if e.resp.status in (404, 410):
                return
            calendar_sync_failed_total.inc()
            raise GoogleCalendarError(str(e)) from e
        except TRANSPORT_ERRORS as e:
            calendar_sync_failed_total.inc()
            raise GoogleCalendarError(str(e)) from e
        logger.info(f"🗑️ [GoogleCalendar] Removed event {appointment.google_event_id}")


def get_calendar_service() -> GoogleCalendarService:
    return GoogleCalendarService()
