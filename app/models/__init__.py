"""Pydantic models for API requests and responses."""
from .book_model import Book, BookStatus, Genre, MyBook, ReadingStatus, Volume
from .review_model import Comment, FeedCard, FeedPage, LikeState, Review
from .saved_book_model import SavedBook, SavedBookCreate
from .user_model import PublicUser, Token, User, UserCreate, UserStats
