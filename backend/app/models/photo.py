"""
PhotoStash Backend - Photo SQLAlchemy Model
=============================================

What:  ORM model for the `photos` table.
Who:   Used by PhotoStore for row operations and by Alembic for migrations.

Columns:
    - id:          auto-incrementing integer key, assigned by the database
    - title:       VARCHAR(100)
    - description: TEXT
    - filename:    name of the stored image, relative to the image directory
    - ori_link:    external reference URL, VARCHAR(255)
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Photo(Base):
    """
    A photo's metadata plus the name of its stored image file.

    Lifecycle:
        1. Created after the upload is saved (id assigned on insert)
        2. Updated in place on replacement (new filename, same id)
        3. Deleted together with its image file
    """

    __tablename__ = "photos"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    filename: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Stored image name, relative to the image directory",
    )

    ori_link: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, filename='{self.filename}')>"
