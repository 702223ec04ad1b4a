# src/core/dependencies.py
from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Header
from jose import JWTError
from core.policy import Action, is_allowed
from utils.exceptions import ForbiddenException, UnauthorizedException
from utils.logger import setup_logger
from utils.security import decode_access_token

logger = setup_logger("ROLE CHECKER")


@dataclass(frozen=True)
class Principal:
    """The authenticated caller as described by the bearer token"""

    user_id: int
    role: str

    def can(self, action: Action) -> bool:
        return is_allowed(self.role, action)


async def get_current_principal(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> Principal:
    """
    Dependency that authenticates the request from its bearer token

    Args:
        authorization: ``Bearer <jwt>`` header value

    Returns:
        Principal with the caller's user id and role

    Raises:
        UnauthorizedException: header missing, malformed, or token invalid/expired
    """
    if not authorization:
        logger.warning("Authorization header missing")
        raise UnauthorizedException("Authentication required")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.warning("Invalid authorization header format")
        raise UnauthorizedException("Invalid authentication scheme")

    try:
        payload = decode_access_token(parts[1])
    except JWTError as e:
        logger.warning(f"JWT validation failed: {str(e)}")
        raise UnauthorizedException("Invalid token")

    raw_id = payload.get("id", payload.get("sub"))
    role = payload.get("role")
    try:
        user_id = int(raw_id)
    except (TypeError, ValueError):
        logger.warning("Invalid token payload - missing or non-numeric user id")
        raise UnauthorizedException("Invalid token payload")

    if not role:
        logger.warning("Invalid token payload - missing role")
        raise UnauthorizedException("Invalid token payload")

    logger.debug(f"Authenticated user: {user_id} ({role})")
    return Principal(user_id=user_id, role=str(role))


class RoleChecker:
    """Dependency enforcing the role policy for one action"""

    def __init__(self, action: Action):
        self.action = action

    async def __call__(
        self, principal: Principal = Depends(get_current_principal)
    ) -> Principal:
        if not principal.can(self.action):
            logger.warning(
                f"Role check failed for user {principal.user_id}. "
                f"Action: {self.action.value}, Has: {principal.role}"
            )
            raise ForbiddenException("Access denied")
        return principal
