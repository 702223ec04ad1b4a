# src/utils/security.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from jose import JWTError, jwt
from core.config import settings
from utils.logger import setup_logger

logger = setup_logger("SECURITY")


def create_access_token(
    user_id: int, role: str, expires_delta: Optional[timedelta] = None
) -> str:
    """Mint a bearer token carrying the caller's id and role.

    Tokens are normally issued by the authentication service; this exists for
    local tooling and tests that need to act as a given user.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(user_id),
        "id": user_id,
        "role": role,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify signature and expiry; raises JWTError on any failure"""
    if not settings.JWT_SECRET:
        logger.error("JWT_SECRET is not configured")
        raise JWTError("Token verification is not configured")
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
