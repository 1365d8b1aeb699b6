"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel
from typing import Dict, List, Optional
from datetime import datetime


class ExpenseCreate(BaseModel):
    """Schema for expense creation."""
    trip_id: int
    amount: float
    description: str
    paid_by: str  # External identity of the payer
    split_with: List[str] = []  # External identities sharing this expense
    date: str


class ExpenseUpdate(BaseModel):
    """Schema for expense update. Only supplied fields are patched."""
    amount: Optional[float] = None
    description: Optional[str] = None
    paid_by: Optional[str] = None
    split_with: Optional[List[str]] = None
    date: Optional[str] = None


class ExpenseResponse(BaseModel):
    """Schema for expense response. User references are local user ids."""
    id: int
    trip_id: int
    amount: float
    description: str
    paid_by: int
    split_with: List[int] = []
    date: str
    created_at: datetime
    
    class Config:
        from_attributes = True


class ExpenseSummary(BaseModel):
    """Totals for a trip's expenses."""
    total_amount: float
    paid_by_user: Dict[int, float]  # Local user id -> amount paid
    expense_count: int
