"""Google Books search client for the catalog browser."""
from typing import List, Optional

import httpx

from app.config import settings
from app.models.book_model import Genre, Volume
from app.utils.logger import get_logger

logger = get_logger(__name__)


class GoogleBooksError(Exception):
    """The Google Books API could not be reached or answered with an error."""


def build_query(query: str, genre: Genre = Genre.all) -> str:
    """Search terms plus a ``subject:`` qualifier unless the genre is All."""
    terms = [query.strip()] if query.strip() else []
    if genre != Genre.all:
        terms.append(f"subject:{genre.value}")
    return " ".join(terms)


def parse_volumes(payload: dict) -> List[Volume]:
    """Turn a ``volumes`` response into Volume models, skipping unusable items."""
    volumes = []
    for item in payload.get("items") or []:
        info = item.get("volumeInfo") or {}
        title = info.get("title")
        if not title:
            logger.warning("Skipping volume %s without a title", item.get("id"))
            continue
        image_links = info.get("imageLinks") or {}
        volumes.append(
            Volume(
                id=item.get("id"),
                title=title,
                authors=info.get("authors") or [],
                thumbnail=image_links.get("thumbnail"),
                categories=info.get("categories") or [],
            )
        )
    return volumes


async def search_volumes(
    query: str,
    genre: Genre = Genre.all,
    client: Optional[httpx.AsyncClient] = None,
) -> List[Volume]:
    """Search Google Books. A blank query without a genre returns nothing."""
    q = build_query(query, genre)
    if not q:
        return []

    params = {"q": q, "maxResults": settings.google_books_max_results}
    if settings.google_books_api_key:
        params["key"] = settings.google_books_api_key

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as own_client:
                response = await own_client.get(settings.google_books_api_url, params=params)
        else:
            response = await client.get(settings.google_books_api_url, params=params)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPError as exc:
        logger.error("Error fetching books for %r: %s", q, exc)
        raise GoogleBooksError(str(exc)) from exc
    except ValueError as exc:
        logger.error("Error decoding Google Books response for %r: %s", q, exc)
        raise GoogleBooksError("Invalid response from Google Books") from exc

    return parse_volumes(payload)
