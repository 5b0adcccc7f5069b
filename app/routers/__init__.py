"""API routers package."""
from fastapi import APIRouter

from . import auth, books, catalog, feed, reviews, saved_books, users

router = APIRouter()
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(books.router, prefix="/books", tags=["books"])
router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
router.include_router(feed.router, prefix="/feed", tags=["feed"])
router.include_router(saved_books.router, prefix="/saved-books", tags=["saved-books"])
