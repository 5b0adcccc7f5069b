"""API tests for the Google Books browser, the social feed and health checks."""
from datetime import datetime, timezone

from app.models.book_model import Volume
from app.models.review_model import FeedCard, FeedPage
from app.services import feed_service, google_books_service
from conftest import make_async


def test_genres(client):
    assert client.get("/catalog/genres").json() == ["All", "Science", "Fiction", "History", "Art"]


def test_search(client, monkeypatch):
    search = make_async([Volume(id="abc", title="Dune", authors=["Frank Herbert"])])
    monkeypatch.setattr(google_books_service, "search_volumes", search)

    response = client.get("/catalog/search", params={"q": "dune", "genre": "Fiction"})

    assert response.status_code == 200
    assert response.json()[0]["title"] == "Dune"
    query, genre = search.calls[0][0]
    assert query == "dune"
    assert genre.value == "Fiction"


def test_search_unknown_genre(client):
    assert client.get("/catalog/search", params={"q": "dune", "genre": "Poetry"}).status_code == 422


def test_search_upstream_failure(client, monkeypatch):
    async def failing(*args, **kwargs):
        raise google_books_service.GoogleBooksError("503 Service Unavailable")

    monkeypatch.setattr(google_books_service, "search_volumes", failing)

    assert client.get("/catalog/search", params={"q": "dune"}).status_code == 502


def test_feed_page(client, monkeypatch):
    card = FeedCard(
        review_id="bob_1",
        heading="A classic",
        author="bob",
        text="Worth it.",
        likes=1,
        comments=0,
        date=datetime(2025, 1, 20, tzinfo=timezone.utc),
        book_title="Frankenstein",
        book_id=1,
    )
    get_page = make_async(FeedPage(cards=[card], page=2, page_size=5, total_cards=6, total_pages=2, has_more=False))
    monkeypatch.setattr(feed_service, "get_feed_page", get_page)

    response = client.get("/feed/", params={"page": 2})

    assert response.status_code == 200
    assert response.json()["cards"][0]["book_title"] == "Frankenstein"
    assert get_page.calls[0][0] == (2,)


def test_feed_rejects_page_zero(client):
    assert client.get("/feed/", params={"page": 0}).status_code == 422


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
