"""
PhotoStash Backend - Request Dependencies
===========================================

What:  FastAPI dependencies that hand the per-app service graph to handlers.
How:   create_app() stores the objects on `app.state`; these functions read
       them back from the current request.
"""

from fastapi import Request

from app.database import Database
from app.services.image_store import ImageStore
from app.services.photo_service import PhotoService


def get_photo_service(request: Request) -> PhotoService:
    return request.app.state.photo_service


def get_image_store(request: Request) -> ImageStore:
    return request.app.state.image_store


def get_database(request: Request) -> Database:
    return request.app.state.database
