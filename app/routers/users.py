"""User profile endpoints."""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status

from app.models.book_model import MyBook, ReadingStatus
from app.models.user_model import PasswordChange, PublicUser, User, UserStats
from app.services import image_service, reading_service, user_service
from app.utils.dependencies import get_current_user
from app.utils.security import verify_password

router = APIRouter()


@router.get("/me", response_model=User)
async def read_current_user(current_user=Depends(get_current_user)):
    """Get current authenticated user's profile."""
    return User.from_db_record(current_user)


@router.get("/me/stats", response_model=UserStats)
async def read_current_user_stats(current_user=Depends(get_current_user)):
    """Books in library, books read and reading progress."""
    return await reading_service.get_user_stats(current_user["id"])


@router.get("/me/books", response_model=List[MyBook])
async def read_my_books(
    status_filter: Optional[ReadingStatus] = Query(None, alias="status"),
    current_user=Depends(get_current_user),
):
    """Catalog books the user is tracking, optionally narrowed to one status."""
    records = await reading_service.list_user_books(current_user["id"], status_filter)
    return [MyBook(**dict(record)) for record in records]


@router.put("/me/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(payload: PasswordChange, current_user=Depends(get_current_user)):
    """Change password. Every existing token stops working afterwards."""
    if payload.new_password != payload.confirm_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="New password and confirmation do not match",
        )
    if not verify_password(payload.current_password, current_user["password_hash"]):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Current password is incorrect")

    await user_service.update_password(current_user["id"], payload.new_password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/me/avatar", response_model=User)
async def upload_avatar(file: UploadFile = File(...), current_user=Depends(get_current_user)):
    """Upload a new profile picture and store its URL."""
    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File must be an image")

    data = await file.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File is empty")

    try:
        url = await image_service.upload_image(data, file.filename or "avatar", content_type)
    except image_service.ImageUploadError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY if exc.configured else status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        )

    user = await user_service.update_image_url(current_user["id"], url)
    return User.from_db_record(user)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(current_user=Depends(get_current_user)):
    """Delete the account with its statuses, reviews and saved books."""
    await user_service.delete_user(current_user["id"])
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}", response_model=PublicUser)
async def get_user(user_id: str):
    """Get user by ID (public endpoint)."""
    try:
        user_uuid = UUID(user_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid user ID format")

    user = await user_service.get_user_by_id(user_uuid)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return PublicUser(id=user["id"], name=user["name"], image_url=user["image_url"] or "", created_at=user["created_at"])
