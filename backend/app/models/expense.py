"""
Expense model for tracking shared spending.
"""
from sqlalchemy import Column, String, Float, ForeignKey, Integer, Table, Text
from sqlalchemy.orm import relationship
from app.db.base import Base, BaseModel


# Association table for Expense and the users it is split with
expense_splits = Table(
    "expense_splits",
    Base.metadata,
    Column("expense_id", Integer, ForeignKey("expenses.id"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), primary_key=True),
)


class Expense(BaseModel):
    """Expense model representing a single spending event."""
    __tablename__ = "expenses"
    
    trip_id = Column(Integer, nullable=False, index=True)
    amount = Column(Float, nullable=False)  # Sign and precision are not checked
    description = Column(Text, nullable=False)
    paid_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(String(32), nullable=False, index=True)
    
    # Relationships
    payer = relationship("User", foreign_keys=[paid_by], back_populates="expenses_paid")
    split_users = relationship("User", secondary=expense_splits, lazy="selectin")

    @property
    def split_with(self):
        return [user.id for user in self.split_users]
