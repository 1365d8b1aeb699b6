"""
Identity token helpers.

The identity provider signs a JWT for every signed-in user. Its ``sub`` claim
is the external identity (stored locally as ``clerk_id``) and the ``name`` and
``email`` claims carry the profile. ``create_identity_token`` mints the same
shape of token for local development and tests.
"""
from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from app.core.config import settings


def create_identity_token(
    clerk_id: str,
    name: str = "",
    email: str = "",
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create a signed identity token for the given external user."""
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.IDENTITY_TOKEN_EXPIRE_MINUTES)
    to_encode = {"sub": clerk_id, "name": name, "email": email, "exp": expire}
    if settings.IDENTITY_ISSUER:
        to_encode["iss"] = settings.IDENTITY_ISSUER
    return jwt.encode(to_encode, settings.IDENTITY_SECRET_KEY, algorithm=settings.IDENTITY_ALGORITHM)


def decode_identity_token(token: str) -> Optional[dict]:
    """Decode and verify an identity token. Returns None when invalid."""
    options = {"verify_iss": bool(settings.IDENTITY_ISSUER)}
    try:
        payload = jwt.decode(
            token,
            settings.IDENTITY_SECRET_KEY,
            algorithms=[settings.IDENTITY_ALGORITHM],
            issuer=settings.IDENTITY_ISSUER,
            options=options
        )
    except JWTError:
        return None
    if not payload.get("sub"):
        return None
    return payload
