# Models package init
"""ORM models; importing this package registers every table on Base.metadata."""

from app.models.photo import Photo

__all__ = ["Photo"]
