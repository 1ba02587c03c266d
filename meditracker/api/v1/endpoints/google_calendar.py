import logging
from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from meditracker import crud, models, schemas
from meditracker.api import deps
from meditracker.core import security
from meditracker.core.config import settings
from meditracker.services import google_calendar
from meditracker.services.google_calendar import GoogleCalendarError

logger = logging.getLogger(__name__)

router = APIRouter()


def _settings_redirect(outcome: str) -> RedirectResponse:
    return RedirectResponse(url=f"{settings.FRONTEND_URL.rstrip('/')}/settings?calendar={outcome}")


@router.get("/auth-url", response_model=schemas.GoogleCalendarAuthUrl)
def get_auth_url(current_user: models.User = Depends(deps.get_current_active_user)) -> Any:
    """
    Step 1: consent URL carrying a signed, short-lived OAuth state.
    """
    try:
        return {"auth_url": google_calendar.get_authorization_url(current_user.id)}
    except GoogleCalendarError as e:
        logger.error(f"❌ [GoogleCalendar] Could not build auth URL: {e}")
        raise HTTPException(status_code=500, detail="Error generating auth URL")


@router.get("/callback")
def oauth_callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    db: Session = Depends(deps.get_db),
) -> Any:
    """
    Step 2: Google redirects here; store the tokens and bounce back to the front end.
    """
    if not code:
        raise HTTPException(status_code=400, detail="Authorization code is required")

    user_id = security.read_oauth_state(state)
    user = crud.user.get(db, id=user_id) if user_id is not None else None
    if not user:
        logger.error("❌ [GoogleCalendar] Callback with invalid or expired state")
        return _settings_redirect("error")

    try:
        access_token, refresh_token, expiry = google_calendar.exchange_code(code)
    except GoogleCalendarError as e:
        logger.error(f"❌ [GoogleCalendar] Callback error: {e}")
        return _settings_redirect("error")

    crud.user.connect_google_calendar(
        db, db_obj=user, access_token=access_token, refresh_token=refresh_token, token_expiry=expiry
    )
    logger.info(f"✅ [GoogleCalendar] Connected for user {user.id}")
    return _settings_redirect("connected")


@router.get("/status", response_model=schemas.GoogleCalendarStatus)
def get_status(current_user: models.User = Depends(deps.get_current_active_user)) -> Any:
    return {
        "connected": bool(current_user.google_calendar_connected),
        "connected_at": current_user.google_calendar_connected_at,
    }


@router.post("/disconnect", response_model=schemas.Message)
def disconnect(
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_active_user),
) -> Any:
    crud.user.disconnect_google_calendar(db, db_obj=current_user)
    return {"message": "Google Calendar disconnected successfully"}
