"""
PhotoStash Backend - Photo Service (Request Handling)
======================================================

What:  The create / read / list / update / delete flows behind the routes.
How:   Composes PhotoStore (rows) and ImageStore (files); returns response
       schemas. Routes only parse the path id and require the upload.
Who:   Built once by create_app() and injected into the photo routes.

Update flow (PUT /photo/{id}):
    ┌──────────┐    ┌─────────────┐    ┌─────────────┐    ┌──────────┐
    │  read    │───▶│ remove old  │───▶│  save new   │───▶│ update   │
    │  (404?)  │    │ image       │    │  image      │    │ row      │
    └──────────┘    └─────────────┘    └─────────────┘    └──────────┘

    A failed removal does not stop the flow: the new image and row are
    still written, then the removal error is raised (500). Delete behaves
    the same way around the row delete. There is no compensation when a
    later step fails (a saved image stays on disk if the insert fails).
"""

import logging
from typing import List, Optional

from app.exceptions import FileStorageError
from app.models.photo import Photo
from app.schemas.photo import DeleteResponse, PhotoDetailResponse, PhotoResponse
from app.services.image_store import AsyncReadable, ImageStore
from app.services.photo_store import PhotoStore

logger = logging.getLogger(__name__)


class PhotoService:
    """
    Business logic for photo operations.

    Stateless apart from its collaborators; safe to share across requests.
    """

    def __init__(self, store: PhotoStore, images: ImageStore, image_base_url: str):
        self.store = store
        self.images = images
        self.image_base_url = image_base_url.rstrip("/")

    def file_url(self, filename: str) -> str:
        return f"{self.image_base_url}/{filename}"

    def to_detail(self, photo: Photo) -> PhotoDetailResponse:
        return PhotoDetailResponse(
            id=photo.id,
            title=photo.title,
            description=photo.description,
            filename=photo.filename,
            file=self.file_url(photo.filename),
            ori_link=photo.ori_link,
        )

    async def list_photos(self) -> List[PhotoResponse]:
        photos = await self.store.list()
        return [PhotoResponse.model_validate(photo) for photo in photos]

    async def get_photo(self, photo_id: int) -> PhotoDetailResponse:
        photo = await self.store.read(photo_id)
        return self.to_detail(photo)

    async def create_photo(
        self,
        stream: AsyncReadable,
        original_filename: Optional[str],
        title: str,
        description: str,
        ori_link: str,
    ) -> PhotoDetailResponse:
        """
        Save the upload, then insert the row.

        Raises:
            FileStorageError: the image could not be written
            DatabaseError: the insert failed (the saved image is left in place)
        """
        stored_name = await self.images.save(stream, original_filename)

        photo = Photo(
            title=title,
            description=description,
            filename=stored_name,
            ori_link=ori_link,
        )
        photo = await self.store.create(photo)
        return self.to_detail(photo)

    async def update_photo(
        self,
        photo_id: int,
        stream: AsyncReadable,
        original_filename: Optional[str],
        title: str,
        description: str,
        ori_link: str,
    ) -> PhotoDetailResponse:
        """
        Replace a photo's image and metadata, keeping its id.

        Raises:
            NotFoundError: no photo with this id
            FileStorageError: old image removal or new image save failed
            DatabaseError: read or update failed
        """
        photo = await self.store.read(photo_id)
        removal_error = await self._remove_image(photo)

        stored_name = await self.images.save(stream, original_filename)

        photo.title = title
        photo.description = description
        photo.filename = stored_name
        photo.ori_link = ori_link
        await self.store.update(photo)

        if removal_error is not None:
            raise removal_error
        return self.to_detail(photo)

    async def delete_photo(self, photo_id: int) -> DeleteResponse:
        """
        Remove a photo's image and row.

        Raises:
            NotFoundError: no photo with this id
            FileStorageError: the image could not be removed (row still deleted)
            DatabaseError: read or delete failed
        """
        photo = await self.store.read(photo_id)
        removal_error = await self._remove_image(photo)

        await self.store.delete(photo_id)

        if removal_error is not None:
            raise removal_error
        return DeleteResponse(result="success")

    async def _remove_image(self, photo: Photo) -> Optional[FileStorageError]:
        """Remove the photo's current image, returning the failure instead of raising it."""
        try:
            await self.images.remove(photo.filename)
        except FileStorageError as e:
            logger.warning(
                "Continuing photo %d mutation after image removal failed: %s",
                photo.id,
                e.message,
            )
            return e
        return None
