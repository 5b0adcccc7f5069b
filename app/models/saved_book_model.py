"""Saved book models."""
from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel, Field


class SavedBookCreate(BaseModel):
    volume_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    authors: List[str] = Field(default_factory=list)
    image_url: str = ""
    categories: List[str] = Field(default_factory=list)


class SavedBook(BaseModel):
    id: int
    user_id: UUID
    volume_id: str
    title: str
    authors: List[str] = Field(default_factory=list)
    image_url: str = ""
    categories: List[str] = Field(default_factory=list)
    saved_at: datetime

    model_config = {"from_attributes": True}
