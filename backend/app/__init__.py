"""
PhotoStash Backend - Application Package
========================================

What: Photo metadata CRUD service with image files kept on local disk.
Who:  Imported by uvicorn (`app.main:app`), Alembic and pytest.

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  <- HTTP concerns only
    ├─────────────────────────────────────┤
    │   PhotoService (request handling)   │  <- read/remove/save/write flows
    ├─────────────────────────────────────┤
    │  PhotoStore (rows) │ ImageStore (fs)│
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  <- async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
