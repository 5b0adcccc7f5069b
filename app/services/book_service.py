"""Book catalog helpers."""
import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import asyncpg
from pydantic import ValidationError

from app.db.connection import get_pool
from app.models.book_model import Book

BOOK_COLUMNS = ("id", "title", "author", "edition", "published", "pages", "publisher", "categories", "description", "img")


class CatalogError(Exception):
    """Raised when the bundled catalog cannot be read."""


def load_catalog(path: Path) -> List[Book]:
    """Read the bundled JSON catalog."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise CatalogError(f"Could not find {path}")
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Could not decode {path}: {exc}")

    if not isinstance(raw, list):
        raise CatalogError(f"Could not decode {path}: expected a list of books")
    try:
        return [Book(**item) for item in raw]
    except (TypeError, ValidationError) as exc:
        raise CatalogError(f"Could not decode {path}: {exc}")


async def get_book_by_id(book_id: int) -> Optional[asyncpg.Record]:
    """Get a book by its ID."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        return await conn.fetchrow("SELECT * FROM books WHERE id=$1", book_id)


async def get_books_by_ids(book_ids: Iterable[int]) -> Dict[int, asyncpg.Record]:
    """Fetch several books at once, keyed by id. Unknown ids are absent."""
    ids = list(set(book_ids))
    if not ids:
        return {}
    pool = await get_pool()
    async with pool.acquire() as conn:
        rows = await conn.fetch("SELECT * FROM books WHERE id = ANY($1::int[])", ids)
    return {row["id"]: row for row in rows}


async def list_books(
    limit: int = 50,
    offset: int = 0,
    search: Optional[str] = None,
    author: Optional[str] = None,
    category: Optional[str] = None,
) -> List[asyncpg.Record]:
    """List books with optional filtering."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        query = "SELECT * FROM books WHERE 1=1"
        params = []
        param_count = 0

        if search:
            param_count += 1
            query += f" AND (title ILIKE ${param_count} OR description ILIKE ${param_count})"
            params.append(f"%{search}%")

        if author:
            param_count += 1
            query += f" AND author ILIKE ${param_count}"
            params.append(f"%{author}%")

        if category:
            param_count += 1
            query += f" AND ${param_count} = ANY(categories)"
            params.append(category)

        query += " ORDER BY id"
        param_count += 1
        query += f" LIMIT ${param_count}"
        params.append(limit)
        param_count += 1
        query += f" OFFSET ${param_count}"
        params.append(offset)

        return await conn.fetch(query, *params)


async def list_categories() -> List[str]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        rows = await conn.fetch(
            """
            SELECT DISTINCT unnest(categories) AS category
            FROM books
            ORDER BY category
            """
        )
    return [row["category"] for row in rows if row["category"]]


async def upsert_books(books: List[Book]) -> int:
    """Insert or refresh catalog rows by id. Returns the number written."""
    if not books:
        return 0
    pool = await get_pool()
    columns = ", ".join(BOOK_COLUMNS)
    placeholders = ", ".join(f"${i}" for i in range(1, len(BOOK_COLUMNS) + 1))
    updates = ", ".join(f"{col} = EXCLUDED.{col}" for col in BOOK_COLUMNS if col != "id")
    async with pool.acquire() as conn:
        await conn.executemany(
            f"INSERT INTO books ({columns}) VALUES ({placeholders}) ON CONFLICT (id) DO UPDATE SET {updates}",
            [tuple(getattr(book, col) for col in BOOK_COLUMNS) for book in books],
        )
    return len(books)
