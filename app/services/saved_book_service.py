"""Saved book helpers."""
from typing import List, Tuple, Union
from uuid import UUID

import asyncpg

from app.db.connection import get_pool
from app.models.saved_book_model import SavedBookCreate
from app.utils.logger import get_logger

logger = get_logger(__name__)


async def save_book(user_id: Union[str, UUID], payload: SavedBookCreate) -> Tuple[asyncpg.Record, bool]:
    """Save a volume for the user. Returns (record, created)."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        record = await conn.fetchrow(
            """
            INSERT INTO saved_books (user_id, volume_id, title, authors, image_url, categories)
            VALUES ($1, $2, $3, $4, $5, $6)
            ON CONFLICT (user_id, volume_id) DO NOTHING
            RETURNING *
            """,
            user_id,
            payload.volume_id,
            payload.title,
            payload.authors,
            payload.image_url,
            payload.categories,
        )
        if record is not None:
            logger.info("User %s saved volume %s", user_id, payload.volume_id)
            return record, True
        existing = await conn.fetchrow(
            "SELECT * FROM saved_books WHERE user_id = $1 AND volume_id = $2",
            user_id,
            payload.volume_id,
        )
    return existing, False


async def list_saved_books(user_id: Union[str, UUID]) -> List[asyncpg.Record]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        return await conn.fetch(
            "SELECT * FROM saved_books WHERE user_id = $1 ORDER BY saved_at DESC, id DESC",
            user_id,
        )


async def delete_saved_book(user_id: Union[str, UUID], saved_book_id: int) -> bool:
    pool = await get_pool()
    async with pool.acquire() as conn:
        result = await conn.execute(
            "DELETE FROM saved_books WHERE id = $1 AND user_id = $2",
            saved_book_id,
            user_id,
        )
    return result.endswith(" 1")
