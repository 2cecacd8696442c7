"""
PhotoStash Backend - Process Entry Point
==========================================

What:  `python -m app` (or the `photostash` console script) starts the server.
How:   Loads settings (environment, .env, conf.json) and runs uvicorn on
       `app.main:app`, which opens the connection pool on first use.
"""

import uvicorn

from app.config import settings


def main() -> None:
    uvicorn.run(
        "app.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
