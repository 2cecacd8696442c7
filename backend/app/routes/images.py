"""
PhotoStash Backend - Image Route
==================================

What:  GET /image/{name} serves a stored image file.
How:   ImageStore.resolve() confines the name to the image directory and
       checks the file exists; FileResponse guesses the content type from
       the extension.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from app.dependencies import get_image_store
from app.schemas.photo import ErrorResponse
from app.services.image_store import ImageStore

router = APIRouter(tags=["Images"])


@router.get(
    "/image/{name:path}",
    summary="Serve a stored image",
    responses={
        200: {"description": "Image file"},
        404: {"description": "Image not found", "model": ErrorResponse},
    },
)
async def serve_image(
    name: str,
    images: ImageStore = Depends(get_image_store),
) -> FileResponse:
    path = images.resolve(name)
    return FileResponse(path=str(path))
