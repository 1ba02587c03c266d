from datetime import datetime
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, Boolean, JSON, Index
from sqlalchemy.orm import relationship
from meditracker.db.base import Base

MEDICINE_FREQUENCIES = ("once-daily", "twice-daily", "thrice-daily", "four-times-daily", "custom")


class Medicine(Base):
    __tablename__ = "medicines"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    name = Column(String, nullable=False)
    dosage = Column(String, nullable=False)
    frequency = Column(String, nullable=False)
    times = Column(JSON, nullable=False, default=list)  # ["08:00", "20:00"]

    duration = Column(String, nullable=True)  # free text, e.g. "7 days"
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    instructions = Column(Text, nullable=True)

    before_meal = Column(Boolean, default=False, nullable=False)
    after_meal = Column(Boolean, default=False, nullable=False)
    with_food = Column(Boolean, default=False, nullable=False)

    reminder_enabled = Column(Boolean, default=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="medicines")

    __table_args__ = (
        Index("ix_medicines_user_active", "user_id", "is_active"),
    )
