"""
PhotoStash Backend - Image File Store
=======================================

What:  Saves uploaded images into the image directory, removes replaced or
       deleted ones and resolves stored names for serving.
How:   Each upload is streamed with aiofiles into a new file named
       `upload-<uuid4 hex><ext>`, opened in exclusive-create mode. The stored
       name is the bare file name, so it never depends on the platform's path
       separator.
Who:   PhotoService (save/remove) and the /image route (resolve).

Directory layout:
    image/
    ├── upload-3f2a9c...e1.jpg
    └── upload-77b0d4...9a.png
"""

import logging
import uuid
from pathlib import Path
from typing import Optional, Protocol

import aiofiles
import aiofiles.os

from app.exceptions import FileStorageError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Bytes read from the upload per iteration.
CHUNK_SIZE = 64 * 1024

STORED_NAME_PREFIX = "upload-"


class AsyncReadable(Protocol):
    """Anything with an awaitable read(size), e.g. FastAPI's UploadFile."""

    async def read(self, size: int = -1) -> bytes: ...


class ImageStore:
    """
    On-disk persistence for uploaded images.

    No locking: concurrent saves always target distinct generated names.
    """

    def __init__(self, image_dir: str):
        self.root = Path(image_dir).resolve()

    def ensure_directory(self) -> None:
        """Create the image directory if it does not exist yet."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cannot create image directory %s: %s", self.root, str(e))
            raise FileStorageError(
                message="Image storage is not available.",
                context={"path": str(self.root), "os_error": str(e)},
            )

    @staticmethod
    def generate_name(original_filename: Optional[str]) -> str:
        """upload-<hex><ext>, keeping the extension of the client's file name."""
        extension = Path(original_filename or "").suffix
        return f"{STORED_NAME_PREFIX}{uuid.uuid4().hex}{extension}"

    async def save(self, stream: AsyncReadable, original_filename: Optional[str]) -> str:
        """
        Write the stream's bytes to a freshly generated file.

        Args:
            stream: async source of the upload bytes
            original_filename: client-side name, only its extension is used

        Returns:
            The stored name, relative to the image directory.

        Raises:
            FileStorageError on any write failure
        """
        self.ensure_directory()
        stored_name = self.generate_name(original_filename)
        path = self.root / stored_name

        written = 0
        try:
            async with aiofiles.open(path, "xb") as f:
                while True:
                    chunk = await stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    await f.write(chunk)
                    written += len(chunk)
        except OSError as e:
            logger.error("Failed to store image at %s: %s", path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(path), "os_error": str(e)},
            )

        logger.info("Image stored: %s (%d bytes)", stored_name, written)
        return stored_name

    def _path_for(self, stored_name: str) -> Path:
        path = (self.root / stored_name).resolve()
        if path.parent != self.root:
            raise ValidationError(
                message="Invalid file path",
                field="filename",
                context={"stored_name": stored_name},
            )
        return path

    async def remove(self, stored_name: str) -> None:
        """
        Delete a stored image.

        Raises:
            FileStorageError if the file cannot be removed (including when it
            is already gone)
        """
        path = self._path_for(stored_name)
        try:
            await aiofiles.os.remove(path)
        except OSError as e:
            logger.error("Failed to remove image %s: %s", stored_name, str(e))
            raise FileStorageError(
                message=f"Could not remove image '{stored_name}'.",
                context={"path": str(path), "os_error": str(e)},
            )

        logger.info("Image removed: %s", stored_name)

    def exists(self, stored_name: str) -> bool:
        try:
            return self._path_for(stored_name).is_file()
        except ValidationError:
            return False

    def resolve(self, stored_name: str) -> Path:
        """
        Absolute path of a stored image, for serving.

        Raises:
            ValidationError: the name points outside the image directory
            NotFoundError: no such file
        """
        path = self._path_for(stored_name)
        if not path.is_file():
            raise NotFoundError(resource="image", resource_id=stored_name)
        return path
