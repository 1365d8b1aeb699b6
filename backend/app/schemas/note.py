"""
Pydantic schemas for Note entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class NoteCreate(BaseModel):
    """Schema for note creation. A note without trip_id is standalone."""
    trip_id: Optional[int] = None
    title: str = ""
    content: str
    is_summary: bool = False  # Request a generated summary after creation


class NoteUpdate(BaseModel):
    """Schema for note update."""
    content: str


class NoteResponse(BaseModel):
    """Schema for note response."""
    id: int
    trip_id: Optional[int] = None
    created_by: int
    title: str
    content: str
    date: str
    summary: Optional[str] = None
    created_at: datetime
    
    class Config:
        from_attributes = True
