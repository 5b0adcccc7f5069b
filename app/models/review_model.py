"""Review, comment and feed models."""
from datetime import datetime
from typing import Annotated, List
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints


class ReviewCreate(BaseModel):
    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    description: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CommentCreate(BaseModel):
    text: str = Field(..., max_length=2000)


class Comment(BaseModel):
    user_name: str
    text: str
    created_at: datetime


class Review(BaseModel):
    id: str
    user_id: UUID
    user_name: str
    book_id: int
    title: str
    description: str
    like_count: int = 0
    comment_count: int = 0
    comments: List[Comment] = Field(default_factory=list)
    date: datetime


class LikeState(BaseModel):
    liked: bool
    like_count: int


class FeedCard(BaseModel):
    review_id: str
    heading: str
    author: str
    text: str
    likes: int
    comments: int
    date: datetime
    book_title: str
    book_id: int
    author_image_url: str = ""


class FeedPage(BaseModel):
    cards: List[FeedCard]
    page: int
    page_size: int
    total_cards: int
    total_pages: int
    has_more: bool
