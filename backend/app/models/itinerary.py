"""
Itinerary item model.
"""
from sqlalchemy import Column, String, Text, Integer, Float
from app.db.base import BaseModel


class ItineraryItem(BaseModel):
    """A dated, orderable activity belonging to a trip."""
    __tablename__ = "itinerary_items"
    
    trip_id = Column(Integer, nullable=False, index=True)
    date = Column(String(32), nullable=False, index=True)
    time = Column(String(16), nullable=True)  # e.g. "14:00"
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    order = Column(Float, nullable=True)  # Drag-and-drop position
