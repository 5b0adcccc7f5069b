"""Review, comment and like helpers."""
from typing import List, Optional, Tuple, Union
from uuid import UUID

import asyncpg

from app.db.connection import get_pool
from app.utils.logger import get_logger

logger = get_logger(__name__)

REVIEW_SELECT = """
    SELECT
        r.id, r.user_id, u.name AS user_name, r.book_id, r.title, r.description,
        r.date,
        (SELECT COUNT(*) FROM review_likes l WHERE l.review_id = r.id) AS like_count,
        (SELECT COUNT(*) FROM review_comments c WHERE c.review_id = r.id) AS comment_count
    FROM reviews r
    JOIN users u ON u.id = r.user_id
"""


def review_key(user_name: str, book_id: int) -> str:
    return f"{user_name}_{book_id}"


def parse_review_id(review_id: str) -> Optional[Tuple[str, int]]:
    """Split ``"<user name>_<book id>"``. Returns None for malformed ids."""
    parts = review_id.split("_")
    if len(parts) != 2 or not parts[0]:
        return None
    try:
        return parts[0], int(parts[1])
    except ValueError:
        return None


async def upsert_review(user, book_id: int, title: str, description: str) -> asyncpg.Record:
    """Create or replace the user's review of a book. Likes and comments are kept."""
    review_id = review_key(user["name"], book_id)
    pool = await get_pool()
    async with pool.acquire() as conn:
        await conn.execute(
            """
            INSERT INTO reviews (id, user_id, book_id, title, description, date)
            VALUES ($1, $2, $3, $4, $5, NOW())
            ON CONFLICT (id)
            DO UPDATE SET title = EXCLUDED.title, description = EXCLUDED.description, date = NOW()
            """,
            review_id,
            user["id"],
            book_id,
            title,
            description,
        )
        record = await conn.fetchrow(REVIEW_SELECT + " WHERE r.id = $1", review_id)
    logger.info("Review %s saved", review_id)
    return record


async def get_review(review_id: str) -> Optional[asyncpg.Record]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        return await conn.fetchrow(REVIEW_SELECT + " WHERE r.id = $1", review_id)


async def list_reviews_for_book(book_id: int) -> List[asyncpg.Record]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        return await conn.fetch(REVIEW_SELECT + " WHERE r.book_id = $1 ORDER BY r.date DESC, r.id", book_id)


async def list_reviews() -> List[asyncpg.Record]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        return await conn.fetch(REVIEW_SELECT + " ORDER BY r.date DESC, r.id")


async def list_comments(review_id: str) -> List[asyncpg.Record]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        return await conn.fetch(
            """
            SELECT user_name, text, created_at
            FROM review_comments
            WHERE review_id = $1
            ORDER BY created_at, id
            """,
            review_id,
        )


async def add_comment(review_id: str, user, text: str) -> List[asyncpg.Record]:
    """Append a comment by ``user`` and return the full comment list."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        await conn.execute(
            """
            INSERT INTO review_comments (review_id, user_id, user_name, text)
            VALUES ($1, $2, $3, $4)
            """,
            review_id,
            user["id"],
            user["name"],
            text,
        )
    logger.info("User %s commented on review %s", user["id"], review_id)
    return await list_comments(review_id)


async def toggle_like(review_id: str, user_id: Union[str, UUID]) -> Tuple[bool, int]:
    """Like the review, or remove the like if already given. Returns (liked, like_count)."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        async with conn.transaction():
            removed = await conn.execute(
                "DELETE FROM review_likes WHERE review_id = $1 AND user_id = $2",
                review_id,
                user_id,
            )
            liked = not removed.endswith(" 1")
            if liked:
                # A concurrent like from the same user may already have landed
                await conn.execute(
                    """
                    INSERT INTO review_likes (review_id, user_id)
                    VALUES ($1, $2)
                    ON CONFLICT (review_id, user_id) DO NOTHING
                    """,
                    review_id,
                    user_id,
                )
            like_count = await conn.fetchval(
                "SELECT COUNT(*) FROM review_likes WHERE review_id = $1",
                review_id,
            )
    return liked, like_count
