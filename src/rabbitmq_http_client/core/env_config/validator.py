"""
Pydantic settings for environment configuration.

Reads ``RABBITMQ_HTTP_CLIENT_*`` variables and ``.env`` files.
"""

from typing import Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..config import DEFAULT_ENDPOINT, DEFAULT_PASSWORD, DEFAULT_USERNAME

ENV_PREFIX = "RABBITMQ_HTTP_CLIENT_"


class ClientSettings(BaseSettings):
    """
    Client configuration from environment variables.

    Reads from:
    1. Environment variables (RABBITMQ_HTTP_CLIENT_*)
    2. .env file
    3. Defaults

    Example .env file:
        RABBITMQ_HTTP_CLIENT_ENDPOINT=https://rabbit.local:15671/api
        RABBITMQ_HTTP_CLIENT_USERNAME=admin
        RABBITMQ_HTTP_CLIENT_PASSWORD=s3kRe7
        RABBITMQ_HTTP_CLIENT_RETRY_MAX_ATTEMPTS=2
        RABBITMQ_HTTP_CLIENT_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    endpoint: str = Field(default=DEFAULT_ENDPOINT, description="Management API base URL")
    username: str = Field(default=DEFAULT_USERNAME)
    password: SecretStr = Field(default=SecretStr(DEFAULT_PASSWORD))

    # Timeouts
    timeout_connect: float = Field(default=5.0, gt=0)
    timeout_read: float = Field(default=30.0, gt=0)

    # Retry
    retry_max_attempts: int = Field(default=0, ge=0)
    retry_delay_ms: int = Field(default=1000, ge=0)

    # Security
    verify_ssl: bool = Field(default=True)
    ca_bundle: Optional[str] = None

    # Connection pool
    pool_connections: int = Field(default=10, ge=1)
    pool_maxsize: int = Field(default=10, ge=1)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text", "colored"] = Field(default="text")
    log_enable_console: bool = Field(default=False)
    log_enable_file: bool = Field(default=False)
    log_file_path: Optional[str] = None

    @field_validator('endpoint')
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"endpoint must be an http(s) URL, got: {v}")
        return v.rstrip("/")

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator('log_file_path')
    @classmethod
    def validate_file_path(cls, v: Optional[str], info) -> Optional[str]:
        """file_path is required when log_enable_file=True."""
        if info.data.get('log_enable_file') and not v:
            raise ValueError("log_file_path is required when log_enable_file=True")
        return v

    @property
    def logging_enabled(self) -> bool:
        return self.log_enable_console or self.log_enable_file
