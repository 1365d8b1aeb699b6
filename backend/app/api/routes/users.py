"""
User routes. Users are created from identity tokens, never signed up here.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.user import UserResponse, UserSync
from app.models.user import User
from app.api.dependencies import get_current_user

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/sync", response_model=UserResponse)
async def sync_current_user(
    profile: UserSync,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get or create the signed-in user and fill in missing profile fields.
    
    The user record itself is created by the identity dependency; this only
    completes name and email when the token did not carry them.
    """
    changed = False
    if profile.name and not current_user.name:
        current_user.name = profile.name
        changed = True
    if profile.email and not current_user.email:
        current_user.email = profile.email
        changed = True
    if changed:
        db.commit()
        db.refresh(current_user)
    return current_user


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """Get current user information."""
    return current_user


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get user by ID."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user
