from typing import List, Literal, Optional
import datetime as dt
from pydantic import BaseModel


class Address(BaseModel):
    line1: Optional[str] = None
    line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None


class Surgery(BaseModel):
    name: Optional[str] = None
    date: Optional[dt.date] = None
    notes: Optional[str] = None


class EmergencyContact(BaseModel):
    name: Optional[str] = None
    relation: Optional[str] = None
    phone: Optional[str] = None


class UserDetailsBase(BaseModel):
    full_name: str
    date_of_birth: dt.date
    gender: Literal["Male", "Female", "Other"]
    blood_group: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Address] = None
    allergies: List[str] = []
    chronic_diseases: List[str] = []
    current_medications: List[str] = []
    surgeries: List[Surgery] = []
    emergency_contact: Optional[EmergencyContact] = None
    insurance_provider: Optional[str] = None
    policy_number: Optional[str] = None
    valid_till: Optional[dt.date] = None
    notes: Optional[str] = None


class UserDetailsIn(UserDetailsBase):
    pass


class UserDetails(UserDetailsBase):
    id: int
    user_id: int
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True
