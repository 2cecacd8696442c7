"""
PhotoStash Backend - Photo Service Unit Tests
===============================================

What:  PhotoService flows with mocked stores.
How:   PhotoStore and ImageStore are replaced by MagicMocks with AsyncMock
       methods, so the call order and the removal-failure behaviour can be
       checked without a database or disk.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.exceptions import DatabaseError, FileStorageError, NotFoundError
from app.models.photo import Photo
from app.services.photo_service import PhotoService


def stored_photo(photo_id: int = 1, filename: str = "upload-old.jpg") -> Photo:
    photo = Photo(
        title="old title",
        description="old description",
        filename=filename,
        ori_link="old link",
    )
    photo.id = photo_id
    return photo


@pytest.fixture
def mock_store():
    store = MagicMock()
    store.create = AsyncMock()
    store.read = AsyncMock()
    store.update = AsyncMock()
    store.delete = AsyncMock()
    store.list = AsyncMock(return_value=[])
    return store


@pytest.fixture
def mock_images():
    images = MagicMock()
    images.save = AsyncMock(return_value="upload-new.jpg")
    images.remove = AsyncMock()
    return images


@pytest.fixture
def service(mock_store, mock_images):
    return PhotoService(mock_store, mock_images, image_base_url="http://test/image/")


class TestPhotoServiceRead:

    @pytest.mark.asyncio
    async def test_get_photo_adds_file_url(self, service, mock_store):
        mock_store.read.return_value = stored_photo(7, "upload-7.jpg")

        result = await service.get_photo(7)

        assert result.id == 7
        assert result.file == "http://test/image/upload-7.jpg"

    @pytest.mark.asyncio
    async def test_list_photos_empty(self, service):
        assert await service.list_photos() == []

    @pytest.mark.asyncio
    async def test_list_photos_has_no_file_url(self, service, mock_store):
        mock_store.list.return_value = [stored_photo(1), stored_photo(2, "upload-2.jpg")]

        result = await service.list_photos()

        assert [p.id for p in result] == [1, 2]
        assert "file" not in result[0].model_dump()


class TestPhotoServiceCreate:

    @pytest.mark.asyncio
    async def test_create_saves_then_inserts(self, service, mock_store, mock_images):
        async def assign_id(photo):
            photo.id = 1
            return photo
        mock_store.create.side_effect = assign_id

        result = await service.create_photo(
            stream=MagicMock(),
            original_filename="test_image.jpg",
            title="test title",
            description="test description",
            ori_link="test ori_link",
        )

        mock_images.save.assert_awaited_once()
        inserted = mock_store.create.await_args.args[0]
        assert inserted.filename == "upload-new.jpg"
        assert result.id == 1
        assert result.title == "test title"
        assert result.file == "http://test/image/upload-new.jpg"

    @pytest.mark.asyncio
    async def test_create_save_failure_skips_insert(self, service, mock_store, mock_images):
        mock_images.save.side_effect = FileStorageError("disk full")

        with pytest.raises(FileStorageError):
            await service.create_photo(MagicMock(), "a.jpg", "t", "d", "l")

        mock_store.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_insert_failure_leaves_file(self, service, mock_store, mock_images):
        mock_store.create.side_effect = DatabaseError()

        with pytest.raises(DatabaseError):
            await service.create_photo(MagicMock(), "a.jpg", "t", "d", "l")

        mock_images.remove.assert_not_awaited()


class TestPhotoServiceUpdate:

    @pytest.mark.asyncio
    async def test_update_replaces_file_and_fields(self, service, mock_store, mock_images):
        mock_store.read.return_value = stored_photo(3)

        result = await service.update_photo(
            3, MagicMock(), "new.jpg", "new title", "new description", "new link"
        )

        mock_images.remove.assert_awaited_once_with("upload-old.jpg")
        updated = mock_store.update.await_args.args[0]
        assert updated.id == 3
        assert updated.filename == "upload-new.jpg"
        assert result.id == 3
        assert result.title == "new title"
        assert result.ori_link == "new link"

    @pytest.mark.asyncio
    async def test_update_missing_photo_touches_nothing(self, service, mock_store, mock_images):
        mock_store.read.side_effect = NotFoundError(resource="photo", resource_id="9")

        with pytest.raises(NotFoundError):
            await service.update_photo(9, MagicMock(), "a.jpg", "t", "d", "l")

        mock_images.remove.assert_not_awaited()
        mock_images.save.assert_not_awaited()
        mock_store.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_continues_after_removal_failure(self, service, mock_store, mock_images):
        mock_store.read.return_value = stored_photo(3)
        mock_images.remove.side_effect = FileStorageError("Could not remove image 'upload-old.jpg'.")

        with pytest.raises(FileStorageError, match="upload-old.jpg"):
            await service.update_photo(3, MagicMock(), "a.jpg", "t", "d", "l")

        mock_images.save.assert_awaited_once()
        mock_store.update.assert_awaited_once()


class TestPhotoServiceDelete:

    @pytest.mark.asyncio
    async def test_delete_removes_file_and_row(self, service, mock_store, mock_images):
        mock_store.read.return_value = stored_photo(5, "upload-5.jpg")

        result = await service.delete_photo(5)

        assert result.result == "success"
        mock_images.remove.assert_awaited_once_with("upload-5.jpg")
        mock_store.delete.assert_awaited_once_with(5)

    @pytest.mark.asyncio
    async def test_delete_continues_after_removal_failure(self, service, mock_store, mock_images):
        mock_store.read.return_value = stored_photo(5)
        mock_images.remove.side_effect = FileStorageError("gone")

        with pytest.raises(FileStorageError):
            await service.delete_photo(5)

        mock_store.delete.assert_awaited_once_with(5)
