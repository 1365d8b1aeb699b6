"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


class UserSync(BaseModel):
    """Profile fields sent when resolving the signed-in user."""
    name: str = ""
    email: Optional[EmailStr] = None


class UserResponse(BaseModel):
    """Schema for user response."""
    id: int
    clerk_id: str
    name: str
    email: str
    created_at: datetime
    
    class Config:
        from_attributes = True
