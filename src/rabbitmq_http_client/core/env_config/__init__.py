"""
Environment configuration for the RabbitMQ HTTP API client.

Example:
    >>> from rabbitmq_http_client.core.env_config import load_from_env, load_credentials_from_env
    >>> config = load_from_env(profile="production")
    >>> username, password = load_credentials_from_env(profile="production")
"""

from .loader import describe_config, load_credentials_from_env, load_from_env, load_settings
from .profiles import PROFILE_ENV_VAR, PROFILES, ProfileType, detect_profile, get_env_file_path
from .validator import ENV_PREFIX, ClientSettings

__all__ = [
    "load_from_env",
    "load_credentials_from_env",
    "load_settings",
    "describe_config",
    "ClientSettings",
    "ENV_PREFIX",
    "ProfileType",
    "PROFILES",
    "PROFILE_ENV_VAR",
    "detect_profile",
    "get_env_file_path",
]
