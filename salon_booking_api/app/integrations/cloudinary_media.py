"""
Cloudinary image storage via the signed upload REST API.

Requests are sent with a shared ``httpx.AsyncClient`` owned by the
application; see https://cloudinary.com/documentation/upload_images
for the signature scheme (SHA‑1 over the sorted parameters followed
by the API secret).
"""

import hashlib
import logging
import time
from typing import Dict, Optional

import httpx

from ..core.errors import IntegrationError

logger = logging.getLogger(__name__)

UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


def sign_params(params: Dict[str, str], api_secret: str) -> str:
    """Return the Cloudinary signature for the given upload parameters."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] != "")
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryUploader:
    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        client: httpx.AsyncClient,
    ) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self._client = client

    async def upload(
        self,
        content: bytes,
        filename: str,
        folder: str,
        public_id: str,
        image_format: str = "jpg",
        content_type: Optional[str] = None,
    ) -> str:
        """Upload an image and return its ``secure_url``."""
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise IntegrationError("Cloudinary credentials are not configured")
        params = {
            "folder": folder,
            "format": image_format,
            "public_id": public_id,
            "timestamp": str(int(time.time())),
        }
        data = dict(params, api_key=self.api_key, signature=sign_params(params, self.api_secret))
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        try:
            response = await self._client.post(UPLOAD_URL.format(cloud_name=self.cloud_name), data=data, files=files)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise IntegrationError(f"Cloudinary upload failed: {exc}") from exc
        url = payload.get("secure_url") or payload.get("url")
        if not url:
            raise IntegrationError("Cloudinary response did not include a URL")
        logger.info("Uploaded image %s/%s", folder, public_id)
        return url
