"""Services package."""
from . import (
    auth_service,
    book_service,
    feed_service,
    google_books_service,
    image_service,
    reading_service,
    review_service,
    saved_book_service,
    user_service,
)

__all__ = [
    "auth_service",
    "book_service",
    "feed_service",
    "google_books_service",
    "image_service",
    "reading_service",
    "review_service",
    "saved_book_service",
    "user_service",
]
