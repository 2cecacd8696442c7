"""
PhotoStash Backend - Pydantic Response Schemas
================================================

What:  Pydantic models defining the JSON bodies the API returns.
How:   FastAPI serializes route results through these models and derives the
       OpenAPI docs from them. Field order is the wire order.

Shapes:
    PhotoResponse        {id, title, description, filename, ori_link}
    PhotoDetailResponse  {id, title, description, filename, file, ori_link}
    ErrorResponse        {error}
"""

from pydantic import BaseModel, Field


class PhotoResponse(BaseModel):
    """
    What:  One photo row as returned by GET /photos.
    """
    id: int = Field(description="Photo identifier assigned by the database")
    title: str = Field(description="Photo title")
    description: str = Field(description="Free-text description")
    filename: str = Field(description="Stored image name under /image/")
    ori_link: str = Field(description="External reference URL")

    model_config = {"from_attributes": True}


class PhotoDetailResponse(BaseModel):
    """
    What:  Single-photo representation with the derived image URL.
    Who:   Returned by GET /photo/{id}, POST /photo and PUT /photo/{id}.
    """
    id: int = Field(description="Photo identifier assigned by the database")
    title: str = Field(description="Photo title")
    description: str = Field(description="Free-text description")
    filename: str = Field(description="Stored image name under /image/")
    file: str = Field(description="Absolute URL of the stored image")
    ori_link: str = Field(description="External reference URL")


class DeleteResponse(BaseModel):
    result: str = Field(default="success")


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every failure response.

    Example:
        {"error": "Photo not found"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
