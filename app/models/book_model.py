"""Book models."""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Book(BaseModel):
    """A book from the bundled catalog."""

    id: int
    title: str
    author: str = ""
    edition: str = ""
    published: str = ""
    pages: str = ""
    publisher: str = ""
    categories: List[str] = Field(default_factory=list)
    description: str = ""
    img: str = ""

    model_config = {"from_attributes": True}


class ReadingStatus(str, Enum):
    planning = "Planning"
    reading = "Reading"
    dropped = "Dropped"
    completed = "Completed"


class BookStatusUpdate(BaseModel):
    status: ReadingStatus


class BookStatus(BaseModel):
    book_id: int
    status: Optional[ReadingStatus] = None
    review: str = ""
    updated_at: Optional[datetime] = None


class MyBook(Book):
    """A catalog book together with the caller's reading status."""

    status: ReadingStatus
    updated_at: datetime


class Genre(str, Enum):
    all = "All"
    science = "Science"
    fiction = "Fiction"
    history = "History"
    art = "Art"


class Volume(BaseModel):
    """A search result from Google Books."""

    id: Optional[str] = None
    title: str
    authors: List[str] = Field(default_factory=list)
    thumbnail: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
