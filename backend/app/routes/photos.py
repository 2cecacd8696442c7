"""
PhotoStash Backend - Photo Route Handlers
===========================================

What:  GET /photos, GET|PUT|DELETE /photo/{id}, POST /photo.
How:   Parses the path id and the multipart form, delegates to PhotoService,
       returns the schema with the route's success status. Failures are
       raised as application exceptions and rendered by the global handlers.

Multipart form (POST and PUT):
    file         image upload (required)
    title        text, default ""
    description  text, default ""
    ori_link     text, default ""
"""

import logging
import re
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.dependencies import get_photo_service
from app.exceptions import ValidationError
from app.schemas.photo import (
    DeleteResponse,
    ErrorResponse,
    PhotoDetailResponse,
    PhotoResponse,
)
from app.services.photo_service import PhotoService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Photos"])

_PHOTO_ID_RE = re.compile(r"[0-9]+")

# Upper bound of the INTEGER primary key column.
MAX_PHOTO_ID = 2**31 - 1


def parse_photo_id(raw: str) -> int:
    """Path segment → int in 1..MAX_PHOTO_ID, or ValidationError("Invalid photo ID")."""
    if not _PHOTO_ID_RE.fullmatch(raw) or not 1 <= int(raw) <= MAX_PHOTO_ID:
        raise ValidationError(
            message="Invalid photo ID",
            field="id",
            context={"value": raw},
        )
    return int(raw)


def require_upload(file: Optional[UploadFile]) -> UploadFile:
    if file is None:
        raise ValidationError(message="Invalid request payload", field="file")
    return file


@router.get(
    "/photos",
    response_model=List[PhotoResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List all photos",
)
async def list_photos(
    service: PhotoService = Depends(get_photo_service),
) -> List[PhotoResponse]:
    return await service.list_photos()


@router.get(
    "/photo/{photo_id}",
    response_model=PhotoDetailResponse,
    responses={
        400: {"description": "Invalid photo ID", "model": ErrorResponse},
        404: {"description": "Photo not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Get a single photo by ID",
)
async def get_photo(
    photo_id: str,
    service: PhotoService = Depends(get_photo_service),
) -> PhotoDetailResponse:
    return await service.get_photo(parse_photo_id(photo_id))


@router.post(
    "/photo",
    status_code=201,
    response_model=PhotoDetailResponse,
    responses={
        400: {"description": "Missing file upload", "model": ErrorResponse},
        500: {"description": "File or store error", "model": ErrorResponse},
    },
    summary="Upload a photo with its metadata",
)
async def create_photo(
    file: Optional[UploadFile] = File(default=None, description="Image file"),
    title: str = Form(default=""),
    description: str = Form(default=""),
    ori_link: str = Form(default=""),
    service: PhotoService = Depends(get_photo_service),
) -> PhotoDetailResponse:
    """
    Store the uploaded image and create its photo row.

    Returns 201 with the created photo, including its generated filename and
    derived `file` URL.
    """
    upload = require_upload(file)
    logger.info("Received photo upload: filename=%s", upload.filename or "unknown")

    try:
        return await service.create_photo(
            stream=upload,
            original_filename=upload.filename,
            title=title,
            description=description,
            ori_link=ori_link,
        )
    finally:
        await upload.close()


@router.put(
    "/photo/{photo_id}",
    response_model=PhotoDetailResponse,
    responses={
        400: {"description": "Invalid photo ID or missing file", "model": ErrorResponse},
        404: {"description": "Photo not found", "model": ErrorResponse},
        500: {"description": "File or store error", "model": ErrorResponse},
    },
    summary="Replace a photo's image and metadata",
)
async def update_photo(
    photo_id: str,
    file: Optional[UploadFile] = File(default=None, description="Replacement image file"),
    title: str = Form(default=""),
    description: str = Form(default=""),
    ori_link: str = Form(default=""),
    service: PhotoService = Depends(get_photo_service),
) -> PhotoDetailResponse:
    """
    Replace the stored image and every metadata field; the id is kept.

    If the previous image cannot be removed, the new image and row are still
    written and the response is a 500 naming the removal failure.
    """
    parsed_id = parse_photo_id(photo_id)
    upload = require_upload(file)

    try:
        return await service.update_photo(
            photo_id=parsed_id,
            stream=upload,
            original_filename=upload.filename,
            title=title,
            description=description,
            ori_link=ori_link,
        )
    finally:
        await upload.close()


@router.delete(
    "/photo/{photo_id}",
    response_model=DeleteResponse,
    responses={
        400: {"description": "Invalid photo ID", "model": ErrorResponse},
        404: {"description": "Photo not found", "model": ErrorResponse},
        500: {"description": "File or store error", "model": ErrorResponse},
    },
    summary="Delete a photo and its image",
)
async def delete_photo(
    photo_id: str,
    service: PhotoService = Depends(get_photo_service),
) -> DeleteResponse:
    return await service.delete_photo(parse_photo_id(photo_id))
