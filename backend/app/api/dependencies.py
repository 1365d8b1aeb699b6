"""
Shared API dependencies.
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from app.core.security import decode_identity_token
from app.db.session import get_db
from app.models.user import User
from app.services.user_service import get_or_create_user

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the identity token to a local user, creating the user on first sight."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"}
        )
    
    payload = decode_identity_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid identity token",
            headers={"WWW-Authenticate": "Bearer"}
        )
    
    return get_or_create_user(
        payload["sub"],
        db,
        name=payload.get("name", ""),
        email=payload.get("email", "")
    )
