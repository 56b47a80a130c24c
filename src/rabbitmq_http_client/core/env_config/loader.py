"""
Configuration loader from environment variables and .env files.

Main entry point for loading configuration.
"""

from typing import Any, Optional, Tuple

from ...utils.sanitizer import mask_secret
from ..config import ClientConfig, ConnectionPoolConfig, RetryConfig, SecurityConfig, TimeoutConfig
from ..logging.config import LoggingConfig
from ..secrets import Secret
from .profiles import ProfileType, get_env_file_path
from .validator import ClientSettings


def load_settings(profile: Optional[ProfileType] = None, env_file: Optional[str] = None) -> ClientSettings:
    """Settings from ``env_file``, or the profile's file when it is not given."""
    if env_file is None:
        env_file = get_env_file_path(profile)
    return ClientSettings(_env_file=env_file)


def load_from_env(
    profile: Optional[ProfileType] = None,
    env_file: Optional[str] = None,
    **overrides: Any
) -> ClientConfig:
    """
    Load ClientConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters, named like the settings fields
    2. Environment variables (RABBITMQ_HTTP_CLIENT_*)
    3. .env file (profile-specific or default)
    4. Defaults

    The password is not part of ClientConfig; see load_credentials_from_env.

    Example:
        >>> config = load_from_env(profile="production", retry_max_attempts=3)
    """
    settings = load_settings(profile, env_file)

    def value(name: str) -> Any:
        return overrides.get(name, getattr(settings, name))

    logging_config = None
    if value('log_enable_console') or value('log_enable_file'):
        logging_config = LoggingConfig.create(
            level=value('log_level'),
            format=value('log_format'),
            enable_console=value('log_enable_console'),
            enable_file=value('log_enable_file'),
            file_path=value('log_file_path'),
        )

    return ClientConfig(
        endpoint=value('endpoint'),
        username=value('username'),
        timeout=TimeoutConfig(connect=value('timeout_connect'), read=value('timeout_read')),
        retry=RetryConfig(max_attempts=value('retry_max_attempts'), delay_ms=value('retry_delay_ms')),
        pool=ConnectionPoolConfig(
            pool_connections=value('pool_connections'),
            pool_maxsize=value('pool_maxsize'),
        ),
        security=SecurityConfig(verify_ssl=value('verify_ssl'), ca_bundle=value('ca_bundle')),
        logging=logging_config,
    )


def load_credentials_from_env(
    profile: Optional[ProfileType] = None,
    env_file: Optional[str] = None,
) -> Tuple[str, Secret]:
    """(username, password) from ``RABBITMQ_HTTP_CLIENT_USERNAME`` / ``_PASSWORD``."""
    settings = load_settings(profile, env_file)
    return settings.username, Secret(settings.password.get_secret_value())


def describe_config(config: ClientConfig, username_visible_chars: int = 2) -> str:
    """
    One-line summary for diagnostics. Never includes the password.

    Example:
        >>> describe_config(load_from_env())
        'endpoint=http://localhost:15672/api username=gu***st timeout=5/30s retry=0x1000ms verify_ssl=True'
    """
    return (
        f"endpoint={config.endpoint} "
        f"username={mask_secret(config.username, username_visible_chars)} "
        f"timeout={config.timeout.connect:g}/{config.timeout.read:g}s "
        f"retry={config.retry.max_attempts}x{config.retry.delay_ms}ms "
        f"verify_ssl={config.security.verify_ssl}"
    )
