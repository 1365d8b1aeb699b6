"""
Expense service for expense-related business logic.
"""
from sqlalchemy.orm import Session
from typing import Dict, List, Optional
from app.models.expense import Expense
from app.services.user_service import get_or_create_user, resolve_users


def create_expense_with_splits(
    trip_id: int,
    amount: float,
    description: str,
    paid_by: str,
    split_with: List[str],
    expense_date: str,
    db: Session
) -> Expense:
    """Create an expense. Payer and split members are external identities."""
    payer = get_or_create_user(paid_by, db)
    split_users = resolve_users(split_with, db)

    expense = Expense(
        trip_id=trip_id,
        amount=amount,
        description=description,
        paid_by=payer.id,
        date=expense_date
    )
    # Duplicated identities in split_with collapse to one member
    expense.split_users = list({user.id: user for user in split_users}.values())
    db.add(expense)
    db.commit()
    db.refresh(expense)
    
    return expense


def update_expense(
    expense_id: int,
    updates: Dict,
    db: Session
) -> Optional[Expense]:
    """Patch the supplied fields of an expense. Returns None when it does not exist."""
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if not expense:
        return None
    
    paid_by = updates.pop("paid_by", None)
    split_with = updates.pop("split_with", None)
    if paid_by is not None:
        expense.paid_by = get_or_create_user(paid_by, db).id
    if split_with is not None:
        split_users = resolve_users(split_with, db)
        expense.split_users = list({user.id: user for user in split_users}.values())
    for field, value in updates.items():
        setattr(expense, field, value)
    
    db.commit()
    db.refresh(expense)
    return expense


def list_expenses_for_user(trip_id: int, user_id: int, db: Session) -> List[Expense]:
    """Expenses of a trip paid by or split with a user, newest first."""
    expenses = db.query(Expense).filter(
        Expense.trip_id == trip_id
    ).order_by(Expense.id.desc()).all()
    return [
        expense for expense in expenses
        if expense.paid_by == user_id or user_id in expense.split_with
    ]


def summarize_expenses(trip_id: int, db: Session) -> Dict:
    """Total amount, amount paid per user and count for a trip."""
    expenses = db.query(Expense).filter(Expense.trip_id == trip_id).all()
    
    paid_by_user: Dict[int, float] = {}
    for expense in expenses:
        paid_by_user[expense.paid_by] = paid_by_user.get(expense.paid_by, 0) + expense.amount
    
    return {
        "total_amount": sum(expense.amount for expense in expenses),
        "paid_by_user": paid_by_user,
        "expense_count": len(expenses)
    }
