"""
Destination model.
"""
from sqlalchemy import Column, String, Text, Integer
from app.db.base import BaseModel


class Destination(BaseModel):
    """A place visited during a trip."""
    __tablename__ = "destinations"
    
    trip_id = Column(Integer, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    location = Column(String(255), nullable=False)
    arrival_date = Column(String(32), nullable=False)
    departure_date = Column(String(32), nullable=False)
    notes = Column(Text, nullable=True)
