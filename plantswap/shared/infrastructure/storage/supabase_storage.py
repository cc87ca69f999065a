# 📄 File: plantswap/shared/infrastructure/storage/supabase_storage.py

# 🧭 Purpose (Layman Explanation):
# This file handles uploading plant photos and profile pictures to cloud storage,
# checking that they really are pictures and not too big, and giving back a link anyone can open.

# 🧪 Purpose (Technical Summary):
# Supabase Storage wrapper with image validation (Pillow), per-bucket size caps,
# lazy bucket bootstrap, upload under <user_id>-<timestamp>.<ext>, public URL derivation
# and object removal. Backend failures are logged and raised as StorageError.

# 🔗 Dependencies:
# - supabase: Storage client
# - PIL (Pillow): Image validation
# - asyncio: Thread offloading for the synchronous client

# 🔄 Connected Modules / Calls From:
# Called by: PlantService (plant photos), ProfileService (avatars)
# Connects to: Supabase cloud storage (plants and avatars buckets)

import asyncio
import io
import logging
import time
from pathlib import Path
from typing import Dict, Optional, Set

from PIL import Image, UnidentifiedImageError
from supabase import Client

from plantswap.shared.config.settings import Settings, get_settings
from plantswap.shared.core.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    StorageError,
)

logger = logging.getLogger(__name__)

# Pillow format name -> (content type, file extension)
IMAGE_FORMATS: Dict[str, tuple] = {
    "JPEG": ("image/jpeg", "jpg"),
    "PNG": ("image/png", "png"),
    "WEBP": ("image/webp", "webp"),
    "GIF": ("image/gif", "gif"),
}


class SupabaseStorageClient:
    """
    Image storage for plant photos and avatars.

    Buckets are public-read; objects are addressed by the public URL stored
    on the plant or profile row.
    """

    def __init__(self, client: Client, settings: Optional[Settings] = None):
        self._client = client
        self.settings = settings or get_settings()
        self._ready_buckets: Set[str] = set()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_image(self, bucket: str, data: bytes) -> tuple:
        """
        Check size cap and that the payload decodes as a supported image.

        Returns:
            (content_type, extension) detected from the image itself
        """
        max_size = self.settings.bucket_size_limits().get(bucket, self.settings.MAX_AVATAR_SIZE)
        if len(data) > max_size:
            raise FileTooLargeError(
                f"File size must be less than {max_size // (1024 * 1024)}MB",
                file_size=len(data),
                max_size=max_size,
            )

        try:
            with Image.open(io.BytesIO(data)) as img:
                image_format = img.format
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise InvalidFileTypeError(
                "Please upload an image file (JPEG, PNG, WEBP or GIF)",
                allowed_types=[content_type for content_type, _ in IMAGE_FORMATS.values()],
            ) from e

        if image_format not in IMAGE_FORMATS:
            raise InvalidFileTypeError(
                f"Unsupported image format: {image_format}",
                file_type=image_format,
                allowed_types=[content_type for content_type, _ in IMAGE_FORMATS.values()],
            )
        return IMAGE_FORMATS[image_format]

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @staticmethod
    def build_object_path(user_id: str, filename: Optional[str], default_ext: str) -> str:
        """Object name ``<user_id>-<epoch millis>.<ext>``, extension taken from the upload name."""
        ext = Path(filename).suffix.lower().lstrip(".") if filename else ""
        return f"{user_id}-{int(time.time() * 1000)}.{ext or default_ext}"

    @staticmethod
    def object_path_from_url(bucket: str, public_url: str) -> Optional[str]:
        """Recover the object path from a public URL of ``bucket``, None if it is not one."""
        marker = f"/object/public/{bucket}/"
        if marker not in public_url:
            return None
        path = public_url.split(marker, 1)[1].split("?", 1)[0]
        return path or None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def upload_image(
        self,
        bucket: str,
        user_id: str,
        data: bytes,
        filename: Optional[str] = None,
    ) -> str:
        """
        Validate and upload an image, returning its public URL.

        Args:
            bucket: Target bucket (plants or avatars)
            user_id: Owner, used as the object name prefix
            data: Raw file bytes
            filename: Original file name, for the extension

        Returns:
            str: Publicly fetchable URL

        Raises:
            FileTooLargeError, InvalidFileTypeError: on invalid input
            StorageError: if the backend rejects the upload
        """
        content_type, default_ext = self.validate_image(bucket, data)
        await self._ensure_bucket(bucket)

        path = self.build_object_path(user_id, filename, default_ext)
        storage = self._client.storage.from_(bucket)

        try:
            await asyncio.to_thread(
                storage.upload,
                path=path,
                file=data,
                file_options={
                    "content-type": content_type,
                    "cache-control": self.settings.STORAGE_CACHE_CONTROL,
                    "upsert": "true",
                },
            )
            public_url = storage.get_public_url(path)
        except Exception as e:
            logger.error(f"Upload to {bucket}/{path} failed: {e}")
            raise StorageError("Failed to upload image", bucket=bucket, path=path) from e

        logger.info(f"Uploaded {bucket}/{path} for user {user_id}")
        return public_url

    async def remove_by_url(self, bucket: str, public_url: str) -> bool:
        """
        Delete the object behind a public URL.

        Returns:
            bool: False when the URL does not point into ``bucket``
        """
        path = self.object_path_from_url(bucket, public_url)
        if not path:
            logger.warning(f"Not a {bucket} object URL, nothing removed: {public_url}")
            return False

        try:
            await asyncio.to_thread(self._client.storage.from_(bucket).remove, [path])
        except Exception as e:
            logger.error(f"Removing {bucket}/{path} failed: {e}")
            raise StorageError("Failed to remove image", bucket=bucket, path=path) from e

        logger.info(f"Removed {bucket}/{path}")
        return True

    async def _ensure_bucket(self, bucket: str) -> None:
        """Create the bucket on first use (public-read, size-capped)."""
        if bucket in self._ready_buckets:
            return

        def run():
            existing = {b.name for b in self._client.storage.list_buckets()}
            if bucket not in existing:
                self._client.storage.create_bucket(
                    bucket,
                    options={
                        "public": True,
                        "file_size_limit": self.settings.bucket_size_limits().get(bucket),
                    },
                )
                logger.info(f"Created storage bucket: {bucket}")

        try:
            await asyncio.to_thread(run)
        except Exception as e:
            # upload may still succeed if the bucket exists but listing is not permitted
            logger.warning(f"Could not ensure bucket {bucket}: {e}")
            return
        self._ready_buckets.add(bucket)
