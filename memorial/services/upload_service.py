"""
Image storage for memory uploads.

Images are streamed into the upload directory under collision-free names
and exposed as ``/uploads/<filename>``. A rejected upload leaves nothing
behind on disk.
"""
import os
import time
import uuid
from pathlib import Path
from typing import BinaryIO, Optional

from memorial import messages
from memorial.memorial_logger import logger

MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10 MiB
CHUNK_SIZE = 1024 * 1024
URL_PREFIX = "/uploads/"


class UploadRejected(Exception):
    """Raised when an uploaded file may not be stored."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedImageType(UploadRejected):
    def __init__(self):
        super().__init__(messages.IMAGES_ONLY)


class ImageTooLarge(UploadRejected):
    def __init__(self):
        super().__init__(messages.FILE_TOO_LARGE)


def check_content_type(content_type: Optional[str]) -> None:
    if not content_type or not content_type.startswith("image/"):
        raise UnsupportedImageType()


def check_size(size: int) -> None:
    if size > MAX_IMAGE_SIZE:
        raise ImageTooLarge()


def build_filename(original_name: Optional[str]) -> str:
    """Unique storage name: ``image-<epoch ms>-<random hex><ext>``."""
    extension = Path(original_name or "").suffix.lower()
    return f"image-{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}{extension}"


def save_image(stream: BinaryIO, content_type: Optional[str], original_name: Optional[str], upload_dir: Path) -> str:
    """
    Validate and store one image.

    Args:
        stream: Readable binary file object holding the upload
        content_type: Declared content type of the upload
        original_name: Client-side filename, used only for its extension
        upload_dir: Directory the image is written into

    Returns:
        The reference URL of the stored image

    Raises:
        UnsupportedImageType: If the content type is not an image type
        ImageTooLarge: If the payload is larger than MAX_IMAGE_SIZE
    """
    check_content_type(content_type)

    upload_dir.mkdir(parents=True, exist_ok=True)
    filename = build_filename(original_name)
    file_path = upload_dir / filename
    partial_path = upload_dir / f".{filename}.part"

    size = 0
    try:
        with open(partial_path, "wb") as buffer:
            while True:
                chunk = stream.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                check_size(size)
                buffer.write(chunk)
        os.replace(partial_path, file_path)
    except Exception:
        partial_path.unlink(missing_ok=True)
        raise

    logger.info(f"Stored image {filename} ({size} bytes)")
    return URL_PREFIX + filename


def remove_image(image_url: Optional[str], upload_dir: Path) -> None:
    """Delete an image previously stored by save_image, if it is still there."""
    if not image_url or not image_url.startswith(URL_PREFIX):
        return
    file_path = upload_dir / image_url[len(URL_PREFIX):]
    file_path.unlink(missing_ok=True)
    logger.info(f"Removed image {file_path.name}")
