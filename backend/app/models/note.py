"""
Note model. Notes without a trip are standalone.
"""
from sqlalchemy import Column, String, Text, ForeignKey, Integer
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Note(BaseModel):
    """Note written by a user, optionally attached to a trip."""
    __tablename__ = "notes"
    
    trip_id = Column(Integer, nullable=True, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False, default="")
    content = Column(Text, nullable=False)
    date = Column(String(32), nullable=False)
    summary = Column(Text, nullable=True)  # Filled in later by the summary task
    
    # Relationships
    author = relationship("User")
