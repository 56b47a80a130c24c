"""
Tests for configuration loader.
"""

import os

import pytest
from pydantic import ValidationError

from rabbitmq_http_client.core.config import ClientConfig
from rabbitmq_http_client.core.env_config import (
    ENV_PREFIX,
    describe_config,
    load_credentials_from_env,
    load_from_env,
    load_settings,
)
from rabbitmq_http_client.core.secrets import Secret


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run every test in an empty directory without RABBITMQ_HTTP_CLIENT_* variables."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


class TestLoadFromEnv:
    """Test load_from_env function."""

    def test_load_with_defaults(self):
        config = load_from_env()
        assert isinstance(config, ClientConfig)
        assert config.endpoint == "http://localhost:15672/api"
        assert config.timeout.connect == 5
        assert config.retry.max_attempts == 0
        assert config.logging is None

    def test_load_from_env_file(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text(
            "RABBITMQ_HTTP_CLIENT_ENDPOINT=https://rabbit.local:15671/api/\n"
            "RABBITMQ_HTTP_CLIENT_TIMEOUT_CONNECT=15.0\n"
            "RABBITMQ_HTTP_CLIENT_RETRY_MAX_ATTEMPTS=2\n"
        )

        config = load_from_env(env_file=str(env_file))

        assert config.endpoint == "https://rabbit.local:15671/api"
        assert config.timeout.connect == 15
        assert config.retry.max_attempts == 2

    def test_environment_beats_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("RABBITMQ_HTTP_CLIENT_USERNAME=from-file\n")
        monkeypatch.setenv("RABBITMQ_HTTP_CLIENT_USERNAME", "from-env")

        assert load_from_env().username == "from-env"

    def test_overrides_have_priority(self, monkeypatch):
        monkeypatch.setenv("RABBITMQ_HTTP_CLIENT_RETRY_DELAY_MS", "50")

        config = load_from_env(retry_delay_ms=10, timeout_read=60.0)

        assert config.retry.delay_ms == 10
        assert config.timeout.read == 60

    def test_load_with_profile(self, tmp_path):
        (tmp_path / ".env.staging").write_text("RABBITMQ_HTTP_CLIENT_ENDPOINT=http://staging:15672/api\n")

        assert load_from_env(profile="staging").endpoint == "http://staging:15672/api"

    def test_logging_enabled_by_console_flag(self, monkeypatch):
        monkeypatch.setenv("RABBITMQ_HTTP_CLIENT_LOG_ENABLE_CONSOLE", "true")
        monkeypatch.setenv("RABBITMQ_HTTP_CLIENT_LOG_LEVEL", "debug")

        config = load_from_env()

        assert config.logging is not None
        assert config.logging.level == "DEBUG"

    def test_invalid_value(self, monkeypatch):
        monkeypatch.setenv("RABBITMQ_HTTP_CLIENT_RETRY_MAX_ATTEMPTS", "-1")
        with pytest.raises(ValidationError):
            load_from_env()

    def test_invalid_endpoint(self, monkeypatch):
        monkeypatch.setenv("RABBITMQ_HTTP_CLIENT_ENDPOINT", "amqp://rabbit:5672")
        with pytest.raises(ValidationError):
            load_settings()


class TestLoadCredentials:

    def test_defaults(self):
        username, password = load_credentials_from_env()
        assert username == "guest"
        assert isinstance(password, Secret)
        assert password.reveal() == "guest"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("RABBITMQ_HTTP_CLIENT_USERNAME", "admin")
        monkeypatch.setenv("RABBITMQ_HTTP_CLIENT_PASSWORD", "s3kRe7")

        username, password = load_credentials_from_env()

        assert username == "admin"
        assert password.reveal() == "s3kRe7"

    def test_password_is_not_printed_by_settings(self, monkeypatch):
        monkeypatch.setenv("RABBITMQ_HTTP_CLIENT_PASSWORD", "s3kRe7")
        assert "s3kRe7" not in repr(load_settings())


def test_describe_config():
    config = ClientConfig.create(username="administrator", timeout=(5, 30))

    summary = describe_config(config)

    assert summary == (
        "endpoint=http://localhost:15672/api username=ad***or "
        "timeout=5/30s retry=0x1000ms verify_ssl=True"
    )
