"""User and virtual host limits."""

from ..commons import UserLimitTarget, VirtualHostLimitTarget
from ..params.limits import EnforcedLimitParams
from ..paths import path
from ..responses.users import UserLimits
from ..responses.vhosts import VirtualHostLimits
from .base import ApiBase, model_list


class LimitsApi(ApiBase):

    def list_all_user_limits(self):
        return self._get("user-limits", model_list(UserLimits))

    def list_user_limits(self, username: str):
        return self._get(path("user-limits", username), model_list(UserLimits))

    def set_user_limit(self, username: str, limit: EnforcedLimitParams):
        kind = UserLimitTarget(limit.kind).value
        return self._put(path("user-limits", username, kind), limit.to_body())

    def clear_user_limit(self, username: str, kind: UserLimitTarget):
        return self._delete(path("user-limits", username, UserLimitTarget(kind).value))

    def list_all_vhost_limits(self):
        return self._get("vhost-limits", model_list(VirtualHostLimits))

    def list_vhost_limits(self, vhost: str):
        return self._get(path("vhost-limits", vhost), model_list(VirtualHostLimits))

    def set_vhost_limit(self, vhost: str, limit: EnforcedLimitParams):
        kind = VirtualHostLimitTarget(limit.kind).value
        return self._put(path("vhost-limits", vhost, kind), limit.to_body())

    def clear_vhost_limit(self, vhost: str, kind: VirtualHostLimitTarget):
        """Clearing a limit that is not set succeeds."""
        return self._delete(path("vhost-limits", vhost, VirtualHostLimitTarget(kind).value),
                            idempotently=True)
