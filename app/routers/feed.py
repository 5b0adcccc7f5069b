"""Social feed endpoint."""
from fastapi import APIRouter, Query

from app.models.review_model import FeedPage
from app.services import feed_service

router = APIRouter()


@router.get("/", response_model=FeedPage)
async def get_feed(page: int = Query(1, ge=1, description="1-based page number")):
    """Reviews from every reader with book titles and author avatars, a page at a time."""
    return await feed_service.get_feed_page(page)
