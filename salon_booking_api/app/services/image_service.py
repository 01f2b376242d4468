"""
Storage of service images.

Uploaded files are stored under a fixed folder and converted to JPEG.
The stored identifier is the file's base name without extension, with
whitespace runs replaced by ``_`` (``"Lash Lift 2.png"`` is stored as
``awl_services/Lash_Lift_2``), so re‑uploading a file with the same
name replaces the previous image.
"""

import logging
import re
from pathlib import PurePath
from typing import Optional

from fastapi import UploadFile

from ..core.errors import IntegrationError, UpstreamFailure

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def public_id_for(filename: str) -> str:
    # Browsers on Windows may send a full path.
    stem = PurePath(filename.replace("\\", "/")).stem
    return _WHITESPACE.sub("_", stem) or "image"


class ImageService:
    def __init__(self, uploader, folder: str) -> None:
        self.uploader = uploader
        self.folder = folder

    async def store(self, upload: Optional[UploadFile]) -> Optional[str]:
        """Upload the file and return its durable URL.

        Returns ``None`` when no file (or an empty file field) was sent.
        """
        if upload is None or not upload.filename:
            return None
        content = await upload.read()
        public_id = public_id_for(upload.filename)
        try:
            return await self.uploader.upload(
                content,
                filename=upload.filename,
                folder=self.folder,
                public_id=public_id,
                image_format="jpg",
                content_type=upload.content_type,
            )
        except IntegrationError as exc:
            logger.exception("Image upload failed for %s", upload.filename)
            raise UpstreamFailure("Failed to upload image") from exc
