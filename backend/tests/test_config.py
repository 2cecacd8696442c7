"""
PhotoStash Backend - Configuration Tests
==========================================

What:  Settings source precedence (kwargs, environment, conf.json) and the
       derived database URL.
"""

import json

import pydantic
import pytest
from sqlalchemy.engine import make_url

from app.config import Settings


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory with none of the settings variables set."""
    for name in (
        "DATABASE_URL", "DB_USER", "DB_PASSWORD", "DB_NAME", "DB_HOST", "DB_PORT",
        "IMAGE_DIR", "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestDatabaseUrl:

    def test_url_from_parts(self, clean_env):
        config = Settings(db_user="alice", db_password="secret", db_name="photos")
        url = make_url(config.sqlalchemy_url)

        assert url.drivername == "postgresql+asyncpg"
        assert url.username == "alice"
        assert url.password == "secret"
        assert url.database == "photos"
        assert url.host == "localhost"
        assert url.port == 5432

    def test_special_characters_in_password_survive(self, clean_env):
        config = Settings(db_user="bob", db_password="p@ss:w/rd%", db_name="photos")

        assert make_url(config.sqlalchemy_url).password == "p@ss:w/rd%"

    def test_empty_password_is_omitted(self, clean_env):
        config = Settings(db_user="bob", db_password="", db_name="photos")

        assert make_url(config.sqlalchemy_url).password is None

    def test_database_url_overrides_parts(self, clean_env):
        config = Settings(
            database_url="sqlite+aiosqlite:///./other.db",
            db_user="ignored",
        )

        assert config.sqlalchemy_url == "sqlite+aiosqlite:///./other.db"


class TestSources:

    def test_reads_conf_json(self, clean_env):
        (clean_env / "conf.json").write_text(
            json.dumps({"db_user": "jsonuser", "db_password": "jsonpass", "db_name": "jsondb"})
        )

        config = Settings()

        assert config.db_user == "jsonuser"
        assert config.db_password == "jsonpass"
        assert config.db_name == "jsondb"

    def test_environment_beats_conf_json(self, clean_env, monkeypatch):
        (clean_env / "conf.json").write_text(json.dumps({"db_user": "jsonuser"}))
        monkeypatch.setenv("DB_USER", "envuser")

        assert Settings().db_user == "envuser"

    def test_missing_conf_json_uses_defaults(self, clean_env):
        config = Settings()

        assert config.db_user == "photostash"
        assert config.backend_port == 8080
        assert config.image_dir == "./image"
        assert config.log_level == "INFO"


class TestValidation:

    def test_log_level_is_normalised(self, clean_env):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self, clean_env):
        with pytest.raises(pydantic.ValidationError):
            Settings(log_level="verbose")

    def test_cors_origins_list(self, clean_env):
        config = Settings(cors_origins="http://a.example, http://b.example,")

        assert config.cors_origins_list == ["http://a.example", "http://b.example"]
