from .user import User
from .user_details import UserDetails
from .appointment import Appointment
from .medicine import Medicine
from .health_record import HealthRecord
