"""Authentication helpers."""
import asyncpg
from fastapi import HTTPException, status

from app.models.user_model import Token
from app.services import user_service
from app.utils.logger import get_logger
from app.utils.security import create_access_token, verify_password

logger = get_logger(__name__)


def issue_token(user) -> Token:
    # Use user ID (UUID) as token subject
    token = create_access_token(subject=str(user["id"]), version=user["token_version"])
    return Token(access_token=token)


async def signup_user(name: str, email: str, password: str) -> Token:
    if await user_service.get_user_by_email(email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")
    if await user_service.get_user_by_name(name):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Name already taken")

    try:
        user = await user_service.create_user(name, email, password)
    except asyncpg.UniqueViolationError:
        # Lost a race with a concurrent signup
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email or name already taken")
    return issue_token(user)


async def login_user(email: str, password: str) -> Token:
    user = await user_service.get_user_by_email(email)
    if not user or not verify_password(password, user["password_hash"]):
        logger.info("Failed login for %s", email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return issue_token(user)


async def logout_user(user) -> None:
    """Invalidate all tokens issued to ``user``."""
    await user_service.bump_token_version(user["id"])
    logger.info("User %s signed out", user["id"])
