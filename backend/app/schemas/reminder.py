"""
Pydantic schemas for Reminder entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ReminderCreate(BaseModel):
    """Schema for reminder creation."""
    trip_id: int
    content: str
    remind_at: str  # ISO datetime


class ReminderUpdate(BaseModel):
    """Schema for reminder update. Only supplied fields are patched."""
    content: Optional[str] = None
    remind_at: Optional[str] = None


class ReminderResponse(BaseModel):
    """Schema for reminder response."""
    id: int
    trip_id: int
    content: str
    remind_at: str
    created_by: int
    created_at: datetime
    
    class Config:
        from_attributes = True
