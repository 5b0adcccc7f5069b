"""FastAPI dependencies for authentication."""
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.services import user_service
from app.utils.security import decode_access_token

security = HTTPBearer()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)):
    """Extract and validate JWT token from Authorization header.

    Tokens issued before the user's last sign-out or password change carry
    a stale version and are rejected.
    """
    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise _unauthorized("Invalid or expired token")

    try:
        user_id = UUID(claims["sub"])
    except ValueError:
        raise _unauthorized("Invalid token format")

    user = await user_service.get_user_by_id(user_id)
    if not user:
        raise _unauthorized("User not found")
    if claims["ver"] != user["token_version"]:
        raise _unauthorized("Token has been revoked")
    return user
