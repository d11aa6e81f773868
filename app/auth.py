"""
Session identity for the effort API.

Login itself lives outside this service; callers arrive with a signed
`session` cookie carrying their user id.
"""

import os
from typing import Optional
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from fastapi import Request, HTTPException, status, Depends
from sqlalchemy.orm import Session

from app.config import utc_now
from app.database import get_db
from app.models.user import User

# Session serializer
SECRET_KEY = os.getenv("SECRET_KEY", "your-super-secret-key-change-in-production-min-32-chars")
SESSION_EXPIRE_MINUTES = int(os.getenv("SESSION_EXPIRE_MINUTES", "480"))
serializer = URLSafeTimedSerializer(SECRET_KEY)


def create_session_token(user_id: int) -> str:
    """Create a session token for a user."""
    data = {
        "user_id": user_id,
        "created": utc_now().isoformat()
    }
    return serializer.dumps(data)


def decode_session_token(token: str) -> Optional[dict]:
    """Decode and validate a session token."""
    try:
        data = serializer.loads(token, max_age=SESSION_EXPIRE_MINUTES * 60)
        return data
    except (BadSignature, SignatureExpired):
        return None


def get_session_user_id(request: Request) -> Optional[int]:
    """Get user ID from session cookie."""
    token = request.cookies.get("session")
    if not token:
        return None

    data = decode_session_token(token)
    if not data:
        return None

    return data.get("user_id")


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Get the active user behind the session cookie.
    Raises HTTPException if not authenticated.
    """
    user_id = get_session_user_id(request)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    user = db.query(User).filter(User.id == user_id, User.is_active.is_(True)).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user

