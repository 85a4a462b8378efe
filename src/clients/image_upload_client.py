"""Cloudinary client for product image uploads."""

import asyncio
import logging
from typing import Optional

import requests

from src.models import ImageFile

logger = logging.getLogger(__name__)


class ImageUploadError(Exception):
    """Raised when an image could not be uploaded."""
    pass


class CloudinaryImageClient:
    """Uploads images to Cloudinary using an unsigned upload preset.

    The HTTP call is blocking, so it runs in a worker thread to keep the
    event loop free while the upload is in flight.
    """

    def __init__(
        self,
        cloud_name: str,
        upload_preset: str,
        base_url: str = "https://api.cloudinary.com/v1_1",
        timeout_seconds: float = 30,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the image client.

        Args:
            cloud_name: Cloudinary cloud name
            upload_preset: Name of the unsigned upload preset
            base_url: Upload API base URL
            timeout_seconds: Request timeout for a single upload
            session: Optional requests session (for connection reuse or testing)
        """
        self._cloud_name = cloud_name
        self._upload_preset = upload_preset
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    @property
    def upload_url(self) -> str:
        return f"{self._base_url}/{self._cloud_name}/image/upload"

    async def upload_image(self, image: ImageFile, folder: str) -> str:
        """Upload an image and return its public URL.

        Args:
            image: The image payload to upload
            folder: Target folder on the image host

        Returns:
            The secure URL of the uploaded image.

        Raises:
            ImageUploadError: If the host is not configured, the request fails,
                or the response carries no URL.
        """
        if not self._cloud_name or not self._upload_preset:
            raise ImageUploadError("Image hosting is not configured (cloud name / upload preset missing)")

        return await asyncio.to_thread(self._post_image, image, folder)

    def _post_image(self, image: ImageFile, folder: str) -> str:
        logger.debug(f"Uploading {image.filename} ({len(image.content)} bytes) to folder '{folder}'")
        try:
            response = self._session.post(
                self.upload_url,
                data={"upload_preset": self._upload_preset, "folder": folder},
                files={"file": (image.filename, image.content, image.content_type)},
                timeout=self._timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Image upload failed for {image.filename}: {e}")
            raise ImageUploadError(f"Failed to upload image: {e}") from e
        except ValueError as e:
            raise ImageUploadError(f"Invalid response from image host: {e}") from e

        url = payload.get("secure_url") or payload.get("url")
        if not url:
            raise ImageUploadError("Image host response did not include a URL")
        return url

    def close(self) -> None:
        self._session.close()
