"""Saved book endpoints."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.models.saved_book_model import SavedBook, SavedBookCreate
from app.services import saved_book_service
from app.utils.dependencies import get_current_user

router = APIRouter()


@router.post("/", response_model=SavedBook, status_code=status.HTTP_201_CREATED)
async def save_book(
    payload: SavedBookCreate,
    response: Response,
    current_user=Depends(get_current_user),
):
    """Save a search result. Saving the same volume again returns the existing entry."""
    record, created = await saved_book_service.save_book(current_user["id"], payload)
    if not created:
        response.status_code = status.HTTP_200_OK
    return SavedBook(**dict(record))


@router.get("/", response_model=List[SavedBook])
async def list_saved_books(current_user=Depends(get_current_user)):
    """The caller's saved books, most recently saved first."""
    records = await saved_book_service.list_saved_books(current_user["id"])
    return [SavedBook(**dict(record)) for record in records]


@router.delete("/{saved_book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_saved_book(saved_book_id: int, current_user=Depends(get_current_user)):
    if not await saved_book_service.delete_saved_book(current_user["id"], saved_book_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Saved book not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
