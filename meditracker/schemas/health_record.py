from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class HealthRecordCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    date: Optional[datetime] = None
    file_url: Optional[str] = None


class HealthRecord(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    date: datetime
    file_url: Optional[str] = None

    class Config:
        from_attributes = True
