"""Authentication settings and statistics."""

from ..paths import path
from ..responses.auth import AuthenticationAttemptStatistics, OAuthConfiguration
from .base import ApiBase, model, model_list


class AuthApi(ApiBase):

    def oauth_configuration(self):
        return self._get("auth", model(OAuthConfiguration))

    def auth_attempts_statistics(self, node: str):
        return self._get(path("auth", "attempts", node), model_list(AuthenticationAttemptStatistics))
