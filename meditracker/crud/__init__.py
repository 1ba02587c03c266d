from .user import user
from .user_details import user_details
from .appointment import appointment
from .medicine import medicine
from .health_record import health_record

__all__ = ["user", "user_details", "appointment", "medicine", "health_record"]
