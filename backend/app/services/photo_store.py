"""
PhotoStash Backend - Photo Record Store
=========================================

What:  Row operations on the `photos` table: create, read, update, delete, list.
How:   Every operation opens its own session from the shared pool and commits
       on success. Statements are SQLAlchemy expressions, so all values are
       bound parameters.
Who:   PhotoService, once per request; tests against SQLite.

Error translation:
    no matching row (read)  → NotFoundError("Photo not found")
    any SQLAlchemyError     → DatabaseError (driver text kept in context)
"""

import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError

from app.database import Database
from app.exceptions import DatabaseError, NotFoundError
from app.models.photo import Photo

logger = logging.getLogger(__name__)


class PhotoStore:
    """
    Persisted Photo rows.

    Operations return detached Photo instances; their attributes stay loaded
    because the session factory uses expire_on_commit=False.
    """

    def __init__(self, database: Database):
        self._db = database

    async def create(self, photo: Photo) -> Photo:
        """
        Insert a new row and return the photo with its generated id.

        Raises:
            DatabaseError: constraint violation or connection failure
        """
        try:
            async with self._db.session() as session:
                session.add(photo)
                await session.flush()
        except SQLAlchemyError as e:
            logger.error("Failed to insert photo %r: %s", photo.filename, str(e))
            raise DatabaseError(
                message="Could not save the photo. Please try again.",
                context={"operation": "create", "db_error": str(e)},
            )

        logger.info("Photo %d created (filename=%s)", photo.id, photo.filename)
        return photo

    async def read(self, photo_id: int) -> Photo:
        """
        Fetch one photo by id.

        Raises:
            NotFoundError: no row with this id
            DatabaseError: query failed
        """
        try:
            async with self._db.session() as session:
                photo = await session.get(Photo, photo_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching photo %d: %s", photo_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the photo. Please try again.",
                context={"operation": "read", "photo_id": photo_id, "db_error": str(e)},
            )

        if photo is None:
            raise NotFoundError(resource="photo", resource_id=str(photo_id))
        return photo

    async def update(self, photo: Photo) -> None:
        """
        Overwrite the mutable columns of the row matching photo.id.

        Existence is not checked here; callers read() first.
        """
        statement = (
            update(Photo)
            .where(Photo.id == photo.id)
            .values(
                title=photo.title,
                description=photo.description,
                filename=photo.filename,
                ori_link=photo.ori_link,
            )
        )
        try:
            async with self._db.session() as session:
                await session.execute(statement)
        except SQLAlchemyError as e:
            logger.error("Failed to update photo %d: %s", photo.id, str(e))
            raise DatabaseError(
                message="Could not update the photo. Please try again.",
                context={"operation": "update", "photo_id": photo.id, "db_error": str(e)},
            )

        logger.info("Photo %d updated (filename=%s)", photo.id, photo.filename)

    async def delete(self, photo_id: int) -> None:
        """Remove the row; deleting an id that matches nothing is not an error."""
        try:
            async with self._db.session() as session:
                await session.execute(delete(Photo).where(Photo.id == photo_id))
        except SQLAlchemyError as e:
            logger.error("Failed to delete photo %d: %s", photo_id, str(e))
            raise DatabaseError(
                message="Could not delete the photo. Please try again.",
                context={"operation": "delete", "photo_id": photo_id, "db_error": str(e)},
            )

        logger.info("Photo %d deleted", photo_id)

    async def list(self) -> List[Photo]:
        """All rows in whatever order the database returns them."""
        try:
            async with self._db.session() as session:
                result = await session.execute(select(Photo))
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing photos: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve photos. Please try again.",
                context={"operation": "list", "db_error": str(e)},
            )
