from typing import List, Literal, Optional
from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator

Frequency = Literal["once-daily", "twice-daily", "thrice-daily", "four-times-daily", "custom"]


def _check_times(times: Optional[List[str]]) -> Optional[List[str]]:
    if times is None:
        return times
    for t in times:
        try:
            datetime.strptime(t, "%H:%M")
        except ValueError:
            raise ValueError(f"Invalid time '{t}', expected HH:MM")
    return times


class MedicineBase(BaseModel):
    name: str = Field(..., min_length=1)
    dosage: str = Field(..., min_length=1)
    frequency: Frequency
    times: List[str] = Field(..., min_length=1)
    duration: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    instructions: Optional[str] = None
    before_meal: bool = False
    after_meal: bool = False
    with_food: bool = False
    reminder_enabled: bool = True

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("times")
    @classmethod
    def validate_times(cls, v):
        return _check_times(v)


class MedicineCreate(MedicineBase):
    pass


class MedicineUpdate(BaseModel):
    name: Optional[str] = None
    dosage: Optional[str] = None
    frequency: Optional[Frequency] = None
    times: Optional[List[str]] = None
    duration: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    instructions: Optional[str] = None
    before_meal: Optional[bool] = None
    after_meal: Optional[bool] = None
    with_food: Optional[bool] = None
    reminder_enabled: Optional[bool] = None

    @field_validator("times")
    @classmethod
    def validate_times(cls, v):
        return _check_times(v)


class Medicine(MedicineBase):
    id: int
    user_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MedicineEnvelope(BaseModel):
    message: str
    data: Medicine
