"""Application configuration module."""
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    pg_host: str = Field(..., alias="PGHOST")
    pg_port: int = Field(default=5432, alias="PGPORT")
    pg_user: str = Field(..., alias="PGUSER")
    pg_password: str = Field(default="", alias="PGPASSWORD")
    pg_database: str = Field(..., alias="PGDATABASE")

    jwt_secret: str = Field(..., alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    google_books_api_url: str = Field(
        default="https://www.googleapis.com/books/v1/volumes", alias="GOOGLE_BOOKS_API_URL"
    )
    google_books_api_key: str = Field(default="", alias="GOOGLE_BOOKS_API_KEY")
    google_books_max_results: int = Field(default=20, alias="GOOGLE_BOOKS_MAX_RESULTS")

    cloudinary_cloud_name: str = Field(default="", alias="CLOUDINARY_CLOUD_NAME")
    cloudinary_upload_preset: str = Field(default="", alias="CLOUDINARY_UPLOAD_PRESET")

    http_timeout_seconds: float = Field(default=10.0, alias="HTTP_TIMEOUT_SECONDS")
    feed_page_size: int = Field(default=5, alias="FEED_PAGE_SIZE")
    catalog_path: Path = Field(
        default=Path(__file__).parent / "data" / "book_details.json", alias="CATALOG_PATH"
    )
    cors_origins: List[str] = Field(
        default=[
            "http://127.0.0.1:5500",
            "http://localhost:5500",
            "http://127.0.0.1:8000",
            "http://localhost:8000",
            "http://127.0.0.1:3000",
            "http://localhost:3000",
        ],
        alias="CORS_ORIGINS",
    )

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "populate_by_name": True,
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
