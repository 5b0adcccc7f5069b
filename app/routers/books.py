"""Bundled catalog, reading status and per-book review endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.models.book_model import Book, BookStatus, BookStatusUpdate, ReadingStatus
from app.models.review_model import Review, ReviewCreate
from app.routers.reviews import review_from_record
from app.services import book_service, reading_service, review_service
from app.utils.dependencies import get_current_user

router = APIRouter()


async def _require_book(book_id: int):
    book = await book_service.get_book_by_id(book_id)
    if not book:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Book with ID {book_id} not found",
        )
    return book


@router.get("/categories", response_model=List[str])
async def get_categories():
    """Get all unique categories in the catalog."""
    return await book_service.list_categories()


@router.get("/", response_model=List[Book])
async def list_books(
    limit: int = Query(50, ge=1, le=100, description="Number of books to return"),
    offset: int = Query(0, ge=0, description="Number of books to skip"),
    search: Optional[str] = Query(None, description="Search in title and description"),
    author: Optional[str] = Query(None, description="Filter by author"),
    category: Optional[str] = Query(None, description="Filter by category"),
):
    """List books with optional filtering and pagination."""
    books = await book_service.list_books(
        limit=limit,
        offset=offset,
        search=search,
        author=author,
        category=category,
    )
    return [Book(**dict(book)) for book in books]


@router.get("/{book_id}", response_model=Book)
async def get_book(book_id: int):
    """Get book details by ID."""
    return Book(**dict(await _require_book(book_id)))


@router.get("/{book_id}/status", response_model=BookStatus)
async def get_book_status(book_id: int, current_user=Depends(get_current_user)):
    """The caller's reading status for a book, or a null status."""
    record = await reading_service.get_status(current_user["id"], book_id)
    if record is None:
        return BookStatus(book_id=book_id)
    return BookStatus(**dict(record))


@router.put("/{book_id}/status", response_model=BookStatus)
async def set_book_status(
    book_id: int,
    payload: BookStatusUpdate,
    current_user=Depends(get_current_user),
):
    """Add a book to the caller's collections or move it between them."""
    await _require_book(book_id)
    record = await reading_service.set_status(current_user["id"], book_id, payload.status)
    return BookStatus(**dict(record))


@router.get("/{book_id}/reviews", response_model=List[Review])
async def list_book_reviews(book_id: int):
    """Reviews of a book, newest first."""
    await _require_book(book_id)
    records = await review_service.list_reviews_for_book(book_id)
    return [review_from_record(record) for record in records]


@router.post("/{book_id}/reviews", response_model=Review, status_code=status.HTTP_201_CREATED)
async def submit_review(
    book_id: int,
    payload: ReviewCreate,
    current_user=Depends(get_current_user),
):
    """Write (or rewrite) the caller's review. The book must be marked Completed first."""
    await _require_book(book_id)

    reading = await reading_service.get_status(current_user["id"], book_id)
    if reading is None or reading["status"] != ReadingStatus.completed.value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only books marked Completed can be reviewed",
        )

    record = await review_service.upsert_review(current_user, book_id, payload.title, payload.description)
    comments = await review_service.list_comments(record["id"])
    return review_from_record(record, comments)
