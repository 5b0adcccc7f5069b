"""
Pytest configuration and fixtures.

Required settings are populated before the app is imported so that no real
database or secrets are needed. Service functions that touch PostgreSQL are
monkeypatched per test.
"""
import os
from datetime import datetime, timezone
from uuid import uuid4

os.environ.setdefault("PGHOST", "localhost")
os.environ.setdefault("PGUSER", "postgres")
os.environ.setdefault("PGDATABASE", "library_test")
os.environ.setdefault("JWT_SECRET", "test-secret-key")

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.utils.dependencies import get_current_user
from app.utils.security import hash_password

TEST_PASSWORD = "hunter22"


@pytest.fixture(scope="session")
def password_hash():
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def user(password_hash):
    """A user row as returned by asyncpg."""
    return {
        "id": uuid4(),
        "name": "alice",
        "email": "alice@example.com",
        "password_hash": password_hash,
        "image_url": "",
        "token_version": 0,
        "created_at": datetime(2025, 1, 9, tzinfo=timezone.utc),
    }


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_client(client, user):
    """Client whose requests are made as ``user``."""
    app.dependency_overrides[get_current_user] = lambda: user
    yield client
    app.dependency_overrides.pop(get_current_user, None)


@pytest.fixture
def book_row():
    return {
        "id": 1,
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "edition": "Reprint",
        "published": "1813",
        "pages": "432",
        "publisher": "Penguin Classics",
        "categories": ["Fiction", "Romance", "Classics"],
        "description": "Manners, money and marriage.",
        "img": "https://covers.example/1.jpg",
    }


def make_async(value):
    """Build an async stand-in for a service function returning ``value``."""
    calls = []

    async def fake(*args, **kwargs):
        calls.append((args, kwargs))
        return value

    fake.calls = calls
    return fake
