"""
Profiles for different environments.

A profile selects the ``.env.<profile>`` file; ``RABBITMQ_HTTP_CLIENT_ENV``
selects one when none is passed explicitly.
"""

import os
from typing import Literal, Optional

ProfileType = Literal["development", "staging", "production"]

PROFILES = ("development", "staging", "production")
PROFILE_ENV_VAR = "RABBITMQ_HTTP_CLIENT_ENV"


def detect_profile() -> Optional[ProfileType]:
    """
    Profile named by ``RABBITMQ_HTTP_CLIENT_ENV``, if it is a known one.

    Example:
        >>> os.environ["RABBITMQ_HTTP_CLIENT_ENV"] = "production"
        >>> detect_profile()
        'production'
    """
    env = os.getenv(PROFILE_ENV_VAR)
    if env in PROFILES:
        return env
    return None


def get_env_file_path(profile: Optional[ProfileType] = None) -> str:
    """
    Get .env file path for profile.

    Example:
        >>> get_env_file_path("staging")
        '.env.staging'
        >>> get_env_file_path(None)  # RABBITMQ_HTTP_CLIENT_ENV unset
        '.env'
    """
    if profile is None:
        profile = detect_profile()

    if profile is None:
        return ".env"

    if profile not in PROFILES:
        raise ValueError(f"Unknown profile {profile!r}, expected one of {', '.join(PROFILES)}")

    return f".env.{profile}"
