from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel

from .user import User
from .user_details import UserDetails
from .appointment import Appointment
from .medicine import Medicine
from .health_record import HealthRecord


class RecordSummary(BaseModel):
    """Everything the front end needs to render the exported PDF."""
    generated_at: datetime
    user: User
    details: Optional[UserDetails] = None
    appointments: List[Appointment] = []
    medicines: List[Medicine] = []
    health_records: List[HealthRecord] = []
