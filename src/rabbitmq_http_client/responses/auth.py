"""Authentication related responses."""

from typing import Optional

from .base import ApiModel


class OAuthConfiguration(ApiModel):
    oauth_enabled: bool = False
    oauth_client_id: Optional[str] = None
    oauth_provider_url: Optional[str] = None


class AuthenticationAttemptStatistics(ApiModel):
    """Per-protocol counters from ``auth/attempts/{node}``."""
    protocol: str
    auth_attempts: int = 0
    auth_attempts_failed: int = 0
    auth_attempts_succeeded: int = 0
