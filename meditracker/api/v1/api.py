from fastapi import APIRouter

from meditracker.api.v1.endpoints import auth
from meditracker.api.v1.endpoints import user_details
from meditracker.api.v1.endpoints import appointments
from meditracker.api.v1.endpoints import medicines
from meditracker.api.v1.endpoints import health_records
from meditracker.api.v1.endpoints import google_calendar
from meditracker.api.v1.endpoints import records

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(user_details.router, prefix="/user-details", tags=["user-details"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
api_router.include_router(medicines.router, prefix="/medicines", tags=["medicines"])
api_router.include_router(health_records.router, prefix="/health-records", tags=["health-records"])
api_router.include_router(google_calendar.router, prefix="/google-calendar", tags=["google-calendar"])
api_router.include_router(records.router, prefix="/records", tags=["records"])
