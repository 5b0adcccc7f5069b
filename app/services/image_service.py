"""Profile image upload to Cloudinary."""
from typing import Optional

import httpx

from app.config import settings
from app.utils.logger import get_logger

logger = get_logger(__name__)

UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


class ImageUploadError(Exception):
    def __init__(self, message: str, configured: bool = True):
        super().__init__(message)
        self.configured = configured


async def upload_image(
    data: bytes,
    filename: str,
    content_type: str,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """Upload image bytes with the unsigned preset and return the secure URL."""
    if not settings.cloudinary_cloud_name or not settings.cloudinary_upload_preset:
        raise ImageUploadError("Image hosting is not configured", configured=False)

    url = UPLOAD_URL.format(cloud_name=settings.cloudinary_cloud_name)
    files = {"file": (filename, data, content_type)}
    form = {"upload_preset": settings.cloudinary_upload_preset}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as own_client:
                response = await own_client.post(url, data=form, files=files)
        else:
            response = await client.post(url, data=form, files=files)
        response.raise_for_status()
        secure_url = response.json().get("secure_url")
    except httpx.HTTPError as exc:
        logger.error("Failed to upload image: %s", exc)
        raise ImageUploadError(f"Failed to upload image: {exc}") from exc
    except ValueError as exc:
        logger.error("Invalid upload response: %s", exc)
        raise ImageUploadError("Invalid response from image host") from exc

    if not secure_url:
        raise ImageUploadError("Image host did not return a URL")
    logger.info("Uploaded image %s", secure_url)
    return secure_url
