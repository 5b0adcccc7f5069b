"""Per-user reading status helpers."""
from typing import List, Optional, Union
from uuid import UUID

import asyncpg

from app.db.connection import get_pool
from app.models.book_model import ReadingStatus
from app.models.user_model import UserStats
from app.utils.logger import get_logger

logger = get_logger(__name__)


async def set_status(user_id: Union[str, UUID], book_id: int, status: ReadingStatus) -> asyncpg.Record:
    """Set the reading status for a book. Resets the attached review text."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        record = await conn.fetchrow(
            """
            INSERT INTO reading_statuses (user_id, book_id, status, review, updated_at)
            VALUES ($1, $2, $3, '', NOW())
            ON CONFLICT (user_id, book_id)
            DO UPDATE SET status = EXCLUDED.status, review = '', updated_at = NOW()
            RETURNING book_id, status, review, updated_at
            """,
            user_id,
            book_id,
            status.value,
        )
    logger.info("User %s set book %s to %s", user_id, book_id, status.value)
    return record


async def get_status(user_id: Union[str, UUID], book_id: int) -> Optional[asyncpg.Record]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        return await conn.fetchrow(
            """
            SELECT book_id, status, review, updated_at
            FROM reading_statuses
            WHERE user_id = $1 AND book_id = $2
            """,
            user_id,
            book_id,
        )


async def list_user_books(
    user_id: Union[str, UUID],
    status: Optional[ReadingStatus] = None,
) -> List[asyncpg.Record]:
    """Catalog books the user tracks, most recently updated first."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        query = """
            SELECT b.*, rs.status, rs.updated_at
            FROM reading_statuses rs
            JOIN books b ON b.id = rs.book_id
            WHERE rs.user_id = $1
        """
        params = [user_id]
        if status is not None:
            query += " AND rs.status = $2"
            params.append(status.value)
        query += " ORDER BY rs.updated_at DESC, b.id"
        return await conn.fetch(query, *params)


async def list_statuses(user_id: Union[str, UUID]) -> List[str]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        rows = await conn.fetch("SELECT status FROM reading_statuses WHERE user_id = $1", user_id)
    return [row["status"] for row in rows]


def compute_stats(statuses: List[str]) -> UserStats:
    """Library size, completed count and completion percentage."""
    books_count = len(statuses)
    books_read = sum(1 for status in statuses if status == ReadingStatus.completed.value)
    progress = (books_read / books_count * 100) if books_count else 0.0
    return UserStats(books_count=books_count, books_read=books_read, reading_progress=round(progress, 2))


async def get_user_stats(user_id: Union[str, UUID]) -> UserStats:
    return compute_stats(await list_statuses(user_id))
