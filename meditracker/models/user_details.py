from datetime import datetime
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from meditracker.db.base import Base


class UserDetails(Base):
    __tablename__ = "user_details"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    # Basic info
    full_name = Column(String, nullable=False)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(String, nullable=False)  # Male, Female, Other
    blood_group = Column(String, nullable=True)

    # Contact info (email lives on the user)
    phone = Column(String, nullable=True)
    address = Column(JSON, nullable=True)  # line1, line2, city, state, zip, country

    # Medical info
    allergies = Column(JSON, nullable=False, default=list)
    chronic_diseases = Column(JSON, nullable=False, default=list)
    current_medications = Column(JSON, nullable=False, default=list)
    surgeries = Column(JSON, nullable=False, default=list)  # [{name, date, notes}]

    emergency_contact = Column(JSON, nullable=True)  # name, relation, phone

    # Insurance
    insurance_provider = Column(String, nullable=True)
    policy_number = Column(String, nullable=True)
    valid_till = Column(Date, nullable=True)

    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="details")
