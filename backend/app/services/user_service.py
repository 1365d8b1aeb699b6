"""
User service mapping external identities to local user records.
"""
import logging
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.models.user import User

logger = logging.getLogger(__name__)


def get_or_create_user(
    clerk_id: str,
    db: Session,
    name: str = "",
    email: str = ""
) -> User:
    """
    Return the user for an external identity, creating it when absent.
    
    The insert relies on the unique clerk_id constraint, so two concurrent
    first requests end up with the same row: the loser of the race rolls back
    and reads the winner's record.
    """
    user = db.query(User).filter(User.clerk_id == clerk_id).first()
    if user:
        return user
    
    user = User(clerk_id=clerk_id, name=name or "", email=email or "")
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        user = db.query(User).filter(User.clerk_id == clerk_id).first()
        if user is None:
            raise
        logger.debug(f"User {clerk_id} was created concurrently, reusing id={user.id}")
        return user
    
    db.refresh(user)
    logger.info(f"Created user id={user.id} for external identity {clerk_id}")
    return user


def resolve_users(clerk_ids: List[str], db: Session) -> List[User]:
    """Resolve a list of external identities to local users, in order."""
    return [get_or_create_user(clerk_id, db) for clerk_id in clerk_ids]
