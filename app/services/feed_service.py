"""Social feed assembly.

The feed joins every review against the bundled catalog (for the book title)
and against the author's profile (for the avatar), then hands out the
resulting cards in fixed-size pages.
"""
import math
from datetime import datetime, timezone
from typing import Dict, List, Mapping

from app.config import settings
from app.models.review_model import FeedCard, FeedPage
from app.services import book_service, review_service, user_service


def assemble_cards(
    reviews: List[Mapping],
    books_by_id: Mapping[int, Mapping],
    avatars_by_name: Dict[str, str],
) -> List[FeedCard]:
    """Build feed cards, dropping reviews of books missing from the catalog."""
    cards = []
    for review in reviews:
        book = books_by_id.get(review["book_id"])
        if book is None:
            continue
        cards.append(
            FeedCard(
                review_id=review["id"],
                heading=review.get("title") or "No Title",
                author=review["user_name"],
                text=review.get("description") or "No Description",
                likes=review.get("like_count") or 0,
                comments=review.get("comment_count") or 0,
                date=review.get("date") or datetime.now(timezone.utc),
                book_title=book["title"],
                book_id=review["book_id"],
                author_image_url=avatars_by_name.get(review["user_name"], ""),
            )
        )
    # Newest first; review id breaks ties so pages are stable
    cards.sort(key=lambda card: card.review_id)
    cards.sort(key=lambda card: card.date, reverse=True)
    return cards


def paginate(cards: List[FeedCard], page: int, page_size: int = 5) -> FeedPage:
    """Return the 1-based ``page`` of ``cards``."""
    if page < 1:
        raise ValueError("page must be >= 1")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    total = len(cards)
    start = (page - 1) * page_size
    end = min(start + page_size, total)
    return FeedPage(
        cards=cards[start:end] if start < total else [],
        page=page,
        page_size=page_size,
        total_cards=total,
        total_pages=math.ceil(total / page_size),
        has_more=end < total,
    )


async def get_feed_page(page: int = 1) -> FeedPage:
    reviews = [dict(record) for record in await review_service.list_reviews()]
    books_by_id = await book_service.get_books_by_ids(review["book_id"] for review in reviews)
    avatars = await user_service.get_avatars_by_names(review["user_name"] for review in reviews)
    cards = assemble_cards(reviews, books_by_id, avatars)
    return paginate(cards, page, settings.feed_page_size)
