"""User service helpers."""
from typing import Dict, Iterable, Optional, Union
from uuid import UUID

import asyncpg

from app.db.connection import get_pool
from app.utils.logger import get_logger
from app.utils.security import hash_password

logger = get_logger(__name__)


async def create_user(name: str, email: str, password: str) -> asyncpg.Record:
    pool = await get_pool()
    password_hash = hash_password(password)
    async with pool.acquire() as conn:
        user = await conn.fetchrow(
            """
            INSERT INTO users (name, email, password_hash)
            VALUES ($1, lower($2), $3)
            RETURNING *
            """,
            name,
            email,
            password_hash,
        )
    logger.info("Created user %s", user["id"])
    return user


async def get_user_by_email(email: str) -> Optional[asyncpg.Record]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        return await conn.fetchrow("SELECT * FROM users WHERE lower(email) = lower($1)", email)


async def get_user_by_name(name: str) -> Optional[asyncpg.Record]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        return await conn.fetchrow("SELECT * FROM users WHERE name=$1", name)


async def get_user_by_id(user_id: Union[str, UUID]) -> Optional[asyncpg.Record]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        return await conn.fetchrow("SELECT * FROM users WHERE id=$1", user_id)


async def get_avatars_by_names(names: Iterable[str]) -> Dict[str, str]:
    """Map each known user name to its profile image URL."""
    names = list(set(names))
    if not names:
        return {}
    pool = await get_pool()
    async with pool.acquire() as conn:
        rows = await conn.fetch(
            "SELECT name, image_url FROM users WHERE name = ANY($1::text[])",
            names,
        )
    return {row["name"]: row["image_url"] or "" for row in rows}


async def update_image_url(user_id: Union[str, UUID], image_url: str) -> asyncpg.Record:
    pool = await get_pool()
    async with pool.acquire() as conn:
        return await conn.fetchrow(
            "UPDATE users SET image_url = $1 WHERE id = $2 RETURNING *",
            image_url,
            user_id,
        )


async def update_password(user_id: Union[str, UUID], new_password: str) -> None:
    """Replace the password hash and invalidate every issued token."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        await conn.execute(
            """
            UPDATE users
            SET password_hash = $1, token_version = token_version + 1
            WHERE id = $2
            """,
            hash_password(new_password),
            user_id,
        )
    logger.info("Password changed for user %s", user_id)


async def bump_token_version(user_id: Union[str, UUID]) -> int:
    pool = await get_pool()
    async with pool.acquire() as conn:
        return await conn.fetchval(
            "UPDATE users SET token_version = token_version + 1 WHERE id = $1 RETURNING token_version",
            user_id,
        )


async def delete_user(user_id: Union[str, UUID]) -> bool:
    """Delete a user; dependent rows go with it via ON DELETE CASCADE."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        result = await conn.execute("DELETE FROM users WHERE id = $1", user_id)
    deleted = result.endswith(" 1")
    if deleted:
        logger.info("Deleted user %s", user_id)
    return deleted
