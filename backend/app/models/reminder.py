"""
Reminder model.
"""
from sqlalchemy import Column, String, Text, ForeignKey, Integer
from app.db.base import BaseModel


class Reminder(BaseModel):
    """Reminder attached to a trip."""
    __tablename__ = "reminders"
    
    trip_id = Column(Integer, nullable=False, index=True)
    content = Column(Text, nullable=False)
    remind_at = Column(String(32), nullable=False, index=True)  # ISO datetime
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
