"""Local image storage for menu item uploads.

Files land in ``{UPLOAD_DIR}/images`` and are served back under
``/uploads/images/<name>``.
"""


import logging
import uuid
from pathlib import Path

from fastapi import UploadFile

from app.core.config import settings
from app.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

_EXTENSIONS: dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}

PUBLIC_PREFIX = "/uploads/images"


class ImageStorage:
    def __init__(
        self,
        root: str | Path,
        allowed_types: list[str],
        max_size_bytes: int,
    ):
        self._dir = Path(root) / "images"
        self._allowed = set(allowed_types)
        self._max_size = max_size_bytes

    async def save(self, upload: UploadFile) -> str:
        """Validate and persist an uploaded image; return its public path."""
        content_type = (upload.content_type or "").lower()
        if content_type not in self._allowed:
            raise ValidationError(
                f"Unsupported image type '{content_type or 'unknown'}'",
                details={"fields": ["image"], "allowed": sorted(self._allowed)},
            )

        content = await upload.read()
        if not content:
            raise ValidationError("Uploaded image is empty", details={"fields": ["image"]})
        if len(content) > self._max_size:
            raise ValidationError(
                f"Image exceeds the {self._max_size // (1024 * 1024)} MB limit",
                details={"fields": ["image"]},
            )

        suffix = _EXTENSIONS.get(content_type) or Path(upload.filename or "").suffix.lower()
        filename = f"item-{uuid.uuid4().hex}{suffix}"
        self._dir.mkdir(parents=True, exist_ok=True)
        (self._dir / filename).write_bytes(content)
        logger.info("Stored menu image %s (%d bytes)", filename, len(content))
        return f"{PUBLIC_PREFIX}/{filename}"

    def discard(self, public_path: str) -> None:
        """Remove a file previously returned by :meth:`save`; missing files are ignored."""
        name = public_path.rsplit("/", 1)[-1]
        (self._dir / name).unlink(missing_ok=True)
        logger.info("Discarded menu image %s", name)


def get_image_storage() -> ImageStorage:
    return ImageStorage(
        settings.upload_dir,
        settings.upload_allowed_types,
        settings.max_upload_size_bytes,
    )
