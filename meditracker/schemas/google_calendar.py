from typing import Optional
from datetime import datetime
from pydantic import BaseModel


class GoogleCalendarAuthUrl(BaseModel):
    auth_url: str


class GoogleCalendarStatus(BaseModel):
    connected: bool
    connected_at: Optional[datetime] = None


class Message(BaseModel):
    message: str
