"""
PhotoStash Backend - Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Values come from (highest priority first) constructor kwargs, environment
       variables, a `.env` file and finally a `conf.json` file in the working
       directory holding the database credentials.
Who:   `create_app()` and the process entry point; tests build their own
       `Settings` instances instead of patching the singleton.

Example conf.json:

    {
        "db_user": "photostash",
        "db_password": "secret",
        "db_name": "photostash"
    }
"""

from typing import List, Tuple, Type

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings.

    All settings have development defaults. Production deployments override
    the database credentials (conf.json or DB_* variables) and IMAGE_BASE_URL.
    """

    # ── Database ──────────────────────────────────────────────────────────
    db_user: str = Field(default="photostash")
    db_password: str = Field(default="")
    db_name: str = Field(default="photostash")
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432, ge=1, le=65535)

    # Full SQLAlchemy URL. When set, the db_* parts above are ignored.
    database_url: str = Field(
        default="",
        description="Async SQLAlchemy connection URL (overrides db_* parts)",
    )

    db_pool_size: int = Field(default=20, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # Run metadata.create_all() at startup instead of relying on Alembic.
    db_create_tables: bool = Field(default=False)

    # ── Image Storage ─────────────────────────────────────────────────────
    image_dir: str = Field(default="./image")

    # Prefix of the derived `file` URL returned with single-photo responses.
    image_base_url: str = Field(default="http://localhost:8080/image")

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8080, ge=1, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        json_file="conf.json",
        json_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Adds conf.json below the environment in the lookup order."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def sqlalchemy_url(self) -> str:
        """
        What:    The URL handed to create_async_engine().
        How:     DATABASE_URL verbatim if present, otherwise an asyncpg URL
                 assembled from the db_* parts. URL.create() escapes special
                 characters in the credentials.
        """
        if self.database_url:
            return self.database_url
        url = URL.create(
            drivername="postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)


# Module-level instance used by the process entry point and Alembic.
settings = Settings()
