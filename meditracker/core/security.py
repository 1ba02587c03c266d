from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Any, Optional, Union
from jose import JWTError, jwt
from passlib.context import CryptContext
from meditracker.core.config import settings

# Export the algorithm constant for use in other modules
ALGORITHM = settings.ALGORITHM

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def create_access_token(subject: Union[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta:
        expire = datetime.now(dt_timezone.utc) + expires_delta
    else:
        expire = datetime.now(dt_timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {"exp": expire, "sub": str(subject)}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


OAUTH_STATE_PURPOSE = "google_calendar"
OAUTH_STATE_EXPIRE_MINUTES = 10


def create_oauth_state(user_id: int) -> str:
    """Signed, short-lived OAuth `state` naming the user who started the consent flow."""
    expire = datetime.now(dt_timezone.utc) + timedelta(minutes=OAUTH_STATE_EXPIRE_MINUTES)
    to_encode = {"exp": expire, "sub": str(user_id), "purpose": OAUTH_STATE_PURPOSE}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def read_oauth_state(state: Optional[str]) -> Optional[int]:
    """User id from a state made by create_oauth_state; None if forged, expired or an access token."""
    if not state:
        return None
    try:
        payload = jwt.decode(state, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if payload.get("purpose") != OAUTH_STATE_PURPOSE:
        return None
    sub = payload.get("sub")
    return int(sub) if isinstance(sub, str) and sub.isdigit() else None
