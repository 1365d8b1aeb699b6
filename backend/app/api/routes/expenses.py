"""
Expense management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.models.expense import Expense
from app.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse, ExpenseSummary
from app.services import expense_service
from app.api.dependencies import get_current_user

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create an expense for a trip.
    
    paid_by and split_with are external identities; users that have never
    signed in are created on the spot.
    """
    return expense_service.create_expense_with_splits(
        trip_id=expense_data.trip_id,
        amount=expense_data.amount,
        description=expense_data.description,
        paid_by=expense_data.paid_by,
        split_with=expense_data.split_with,
        expense_date=expense_data.date,
        db=db
    )


@router.get("/trip/{trip_id}", response_model=List[ExpenseResponse])
async def list_expenses(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List expenses of a trip, newest first."""
    return db.query(Expense).filter(
        Expense.trip_id == trip_id
    ).order_by(Expense.id.desc()).all()


@router.get("/trip/{trip_id}/user/{user_id}", response_model=List[ExpenseResponse])
async def list_expenses_for_user(
    trip_id: int,
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List expenses a user paid for or shares."""
    return expense_service.list_expenses_for_user(trip_id, user_id, db)


@router.get("/trip/{trip_id}/summary", response_model=ExpenseSummary)
async def get_expense_summary(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Total spent, amount paid per user and number of expenses."""
    return expense_service.summarize_expenses(trip_id, db)


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get an expense by ID."""
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )
    return expense


@router.patch("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: int,
    expense_data: ExpenseUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update only the supplied expense fields."""
    expense = expense_service.update_expense(
        expense_id,
        expense_data.model_dump(exclude_unset=True, exclude_none=True),
        db
    )
    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )
    return expense


@router.delete("/{expense_id}")
async def delete_expense(
    expense_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an expense."""
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if expense:
        db.delete(expense)
        db.commit()
    return {"message": "Expense deleted successfully"}
