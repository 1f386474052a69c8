"""Unit tests for configuration loading and context overrides."""

from pathlib import Path

import pytest

from sqlalchemy.engine import make_url

from src.library.runtime.config.config_data import ConfigData, DatabaseConfig
from src.library.runtime.config.config_template import (
    environment_overrides,
    load_config,
    load_templated_yaml,
    substitute_env_vars,
)
from src.library.runtime.config.settings import EnvironmentVariables
from src.library.runtime.context import get_config, with_context

CONFIG_TEMPLATE = """
config:
  app:
    port: ${APP_PORT:-8100}
  database:
    url: ${DATABASE_URL:-sqlite+aiosqlite:///./from-default.db}
  logging:
    level: ${LOG_LEVEL:-DEBUG}
    file: ${LOG_FILE:-}
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_TEMPLATE)
    return path


class TestSubstituteEnvVars:
    def test_default_value(self):
        assert substitute_env_vars("${MISSING_VAR:-fallback}", {}) == "fallback"

    def test_value_from_environment(self):
        assert substitute_env_vars("port: ${PORT:-1}", {"PORT": "9000"}) == "port: 9000"

    def test_required_variable_missing(self):
        with pytest.raises(ValueError, match="REQUIRED_VAR"):
            substitute_env_vars("${REQUIRED_VAR}", {})

    def test_required_variable_custom_message(self):
        with pytest.raises(ValueError, match="set the secret"):
            substitute_env_vars("${SECRET:?set the secret}", {})

    def test_text_without_placeholders_unchanged(self):
        assert substitute_env_vars("plain: value", {}) == "plain: value"


class TestLoadTemplatedYaml:
    def test_defaults_applied(self, config_file, monkeypatch):
        for name in ("APP_PORT", "DATABASE_URL", "LOG_LEVEL", "LOG_FILE"):
            monkeypatch.delenv(name, raising=False)
            monkeypatch.delenv(f"TEST_{name}", raising=False)

        config = load_templated_yaml(config_file, EnvironmentVariables(environment="test"))

        assert config.app.port == 8100
        assert config.app.environment == "test"
        assert config.database.url == "sqlite+aiosqlite:///./from-default.db"
        assert config.logging.level == "DEBUG"
        assert config.logging.file is None

    def test_environment_prefixed_override(self, config_file, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./plain.db")
        monkeypatch.setenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///./prefixed.db")

        config = load_templated_yaml(config_file, EnvironmentVariables(environment="test"))

        assert config.database.url == "sqlite+aiosqlite:///./prefixed.db"

    def test_environment_overrides_strip_prefix(self, monkeypatch):
        monkeypatch.setenv("PRODUCTION_LOG_LEVEL", "ERROR")
        assert environment_overrides("production")["LOG_LEVEL"] == "ERROR"

    def test_empty_file_rejected(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ValueError, match="empty or malformed"):
            load_templated_yaml(path, EnvironmentVariables(environment="test"))

    def test_invalid_values_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("config:\n  app:\n    port: not-a-port\n")
        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path, EnvironmentVariables(environment="test"))

    def test_missing_file_falls_back_to_defaults(self, tmp_path):
        settings = EnvironmentVariables(
            environment="test", config_file=str(tmp_path / "absent.yaml")
        )

        config = load_config(settings)

        assert config.app.environment == "test"
        assert config.database == DatabaseConfig()


class TestDatabaseConfig:
    def test_sync_sqlite_url_upgraded_to_async_driver(self):
        config = DatabaseConfig(url="sqlite:///./library.db")

        assert config.is_sqlite
        url = make_url(config.connection_string)
        assert url.drivername == "sqlite+aiosqlite"
        assert url.database == "./library.db"

    def test_postgres_url_uses_asyncpg(self):
        config = DatabaseConfig(url="postgresql://user:secret@db:5432/library")

        assert not config.is_sqlite
        assert config.connection_string == "postgresql+asyncpg://user:secret@db:5432/library"

    def test_async_url_kept(self):
        config = DatabaseConfig(url="sqlite+aiosqlite:///:memory:")

        url = make_url(config.connection_string)
        assert url.drivername == "sqlite+aiosqlite"
        assert url.database == ":memory:"

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("sqlite+aiosqlite:///:memory:", True),
            ("sqlite+aiosqlite://", True),
            ("sqlite+aiosqlite:///file:shared?mode=memory&uri=true", True),
            ("sqlite+aiosqlite:///./library.db", False),
        ],
    )
    def test_is_memory(self, url, expected):
        assert DatabaseConfig(url=url).is_memory is expected


class TestWithContext:
    def test_partial_dict_override(self):
        original_url = get_config().database.url

        with with_context({"logging": {"level": "ERROR"}}):
            assert get_config().logging.level == "ERROR"
            assert get_config().database.url == original_url

    def test_override_is_restored(self):
        before = get_config()
        with with_context({"app": {"port": 9999}}):
            assert get_config().app.port == 9999
        assert get_config() is before

    def test_config_data_override(self):
        override = ConfigData(database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
        with with_context(override):
            assert get_config().database.url == "sqlite+aiosqlite:///:memory:"

    def test_invalid_override_type(self):
        with pytest.raises(ValueError, match="config_override"):
            with with_context("not a config"):
                pass
