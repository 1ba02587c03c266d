from .user import User, UserCreate, UserBrief, Token, TokenPayload
from .appointment import Appointment, AppointmentCreate, AppointmentUpdate
from .user_details import UserDetails, UserDetailsIn
from .medicine import Medicine, MedicineCreate, MedicineUpdate, MedicineEnvelope
from .health_record import HealthRecord, HealthRecordCreate
from .google_calendar import GoogleCalendarAuthUrl, GoogleCalendarStatus, Message
from .records import RecordSummary
