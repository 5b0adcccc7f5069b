"""Google Books catalog browser endpoints."""
from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from app.models.book_model import Genre, Volume
from app.services import google_books_service

router = APIRouter()


@router.get("/genres", response_model=List[str])
async def list_genres():
    return [genre.value for genre in Genre]


@router.get("/search", response_model=List[Volume])
async def search(
    q: str = Query("", description="Search terms"),
    genre: Genre = Query(Genre.all, description="Restrict results to a subject"),
):
    """Search Google Books, optionally narrowed to a genre."""
    try:
        return await google_books_service.search_volumes(q, genre)
    except google_books_service.GoogleBooksError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Book search failed: {exc}")
