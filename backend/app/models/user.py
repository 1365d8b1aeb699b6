"""
User model mapping an external identity to a local record.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class User(BaseModel):
    """Local user keyed by the identity provider's user id."""
    __tablename__ = "users"
    
    clerk_id = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(200), nullable=False, default="")
    email = Column(String(255), nullable=False, default="")
    
    # Relationships
    owned_trips = relationship("Trip", back_populates="owner")
    expenses_paid = relationship("Expense", foreign_keys="Expense.paid_by", back_populates="payer")
