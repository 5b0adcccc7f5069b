"""Authentication endpoints."""
from fastapi import APIRouter, Depends, Response, status

from app.models.user_model import Token, UserCreate, UserLogin
from app.services import auth_service
from app.utils.dependencies import get_current_user

router = APIRouter()


@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
async def signup(payload: UserCreate):
    """Create a new user and return an access token."""
    return await auth_service.signup_user(
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )


@router.post("/login", response_model=Token)
async def login(payload: UserLogin):
    """Login existing user and return an access token."""
    return await auth_service.login_user(email=payload.email, password=payload.password)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(current_user=Depends(get_current_user)):
    """Sign out everywhere by revoking every token issued so far."""
    await auth_service.logout_user(current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
