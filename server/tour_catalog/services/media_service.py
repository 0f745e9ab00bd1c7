"""Image staging and upload to the remote image host."""

import logging
import os
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from ..core.config import settings
from ..core.exceptions import ImageUploadError, ValidationError
from ..core.observability import get_logger, metrics_collector

logger = logging.getLogger(__name__)
audit_log = get_logger("media")

CHUNK_SIZE = 1024 * 1024

# Bound-box resize without upscaling, then automatic quality selection
IMAGE_TRANSFORMATION = [
    {"width": 800, "height": 600, "crop": "limit"},
    {"quality": "auto"},
]


@dataclass(frozen=True)
class UploadResult:
    """Location of an uploaded image on the image host."""

    url: str
    public_id: Optional[str] = None


class CloudinaryUploader:
    """Pushes local image files to Cloudinary and removes the local copy."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = "travel_website/tours",
        max_bytes: int = 10 * 1024 * 1024,
    ):
        self.folder = folder
        self.max_bytes = max_bytes
        self.config = cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )

    @classmethod
    def from_settings(cls) -> "CloudinaryUploader":
        return cls(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            folder=settings.cloudinary_folder,
            max_bytes=settings.max_upload_bytes,
        )

    def _check_file(self, path: Path) -> None:
        if not path.is_file():
            raise ImageUploadError("File not found at temporary path")
        if path.stat().st_size > self.max_bytes:
            raise ValidationError(
                detail=f"Image exceeds the {self.max_bytes} byte upload limit"
            )

    async def upload(self, path: Path) -> UploadResult:
        """
        Upload a local file and delete it afterwards.

        The local file is removed whether or not the upload succeeds.

        Args:
            path: Path of the staged image file

        Returns:
            UploadResult: Secure URL and public id of the hosted image

        Raises:
            ValidationError: If the file exceeds the size ceiling
            ImageUploadError: If the file is missing or the host rejects it
        """
        path = Path(path)
        public_id = f"tour-{uuid.uuid4()}"
        try:
            self._check_file(path)
            result = await run_in_threadpool(
                cloudinary.uploader.upload,
                str(path),
                folder=self.folder,
                public_id=public_id,
                transformation=IMAGE_TRANSFORMATION,
            )
        except (CloudinaryError, OSError) as e:
            metrics_collector.record_image_upload(success=False)
            audit_log.warning("image_upload_failed", public_id=public_id, error=str(e))
            raise ImageUploadError(str(e)) from e
        finally:
            path.unlink(missing_ok=True)

        metrics_collector.record_image_upload(success=True)
        audit_log.info("image_uploaded", public_id=result.get("public_id"))
        return UploadResult(url=result["secure_url"], public_id=result.get("public_id"))


@asynccontextmanager
async def staged_upload(
    upload: Optional[UploadFile],
    upload_dir: str,
    max_bytes: int,
) -> AsyncIterator[Optional[Path]]:
    """
    Stream an uploaded file to a uniquely named local file.

    Yields None when no file was sent. Any file still present on exit is
    removed, so a request that fails before the upload leaves nothing behind.

    Raises:
        ValidationError: If the upload is larger than ``max_bytes``
    """
    if upload is None or not upload.filename:
        yield None
        return

    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)
    suffix = Path(upload.filename).suffix.lower()
    path = directory / f"{uuid.uuid4().hex}{suffix}"

    try:
        written = 0
        with open(path, "wb") as out:
            while chunk := await upload.read(CHUNK_SIZE):
                written += len(chunk)
                if written > max_bytes:
                    raise ValidationError(
                        detail=f"Image exceeds the {max_bytes} byte upload limit"
                    )
                out.write(chunk)

        logger.debug(
            "Upload staged",
            extra={"filename": upload.filename, "path": os.fspath(path), "bytes": written}
        )
        yield path
    finally:
        path.unlink(missing_ok=True)
