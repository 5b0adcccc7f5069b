"""User models."""
from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, EmailStr, Field, StringConstraints

# Emails are matched case-insensitively
NormalizedEmail = Annotated[EmailStr, AfterValidator(str.lower)]


class UserCreate(BaseModel):
    # "_" separates the name from the book id in review ids, "/" would split the URL path
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50, pattern=r"^[^_/]+$")]
    email: NormalizedEmail
    password: str = Field(..., min_length=6)


class UserLogin(BaseModel):
    email: NormalizedEmail
    password: str


class User(BaseModel):
    """Public profile of a user."""
    id: UUID
    name: str
    email: EmailStr
    image_url: str = ""
    created_at: datetime

    model_config = {"from_attributes": True}

    @classmethod
    def from_db_record(cls, record) -> "User":
        """Create User from database record."""
        return cls(
            id=record["id"],
            name=record["name"],
            email=record["email"],
            image_url=record["image_url"] or "",
            created_at=record["created_at"],
        )


class UserStats(BaseModel):
    books_count: int = 0
    books_read: int = 0
    reading_progress: float = 0.0


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)
    confirm_password: str = Field(..., min_length=1)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class PublicUser(BaseModel):
    """Profile fields visible to other users."""
    id: UUID
    name: str
    image_url: str = ""
    created_at: datetime

    model_config = {"from_attributes": True}
