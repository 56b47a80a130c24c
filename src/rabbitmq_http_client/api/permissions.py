"""Permissions and topic permissions."""

from ..params.permissions import Permissions, TopicPermissions
from ..paths import path
from ..responses.permissions import Permissions as PermissionsInfo
from ..responses.permissions import TopicPermission
from .base import ApiBase, first_or_not_found, model, model_list


class PermissionsApi(ApiBase):

    def list_permissions(self):
        return self._get("permissions", model_list(PermissionsInfo))

    def list_permissions_in(self, vhost: str):
        return self._get(path("vhosts", vhost, "permissions"), model_list(PermissionsInfo))

    def list_permissions_of(self, user: str):
        return self._get(path("users", user, "permissions"), model_list(PermissionsInfo))

    def get_permissions(self, vhost: str, user: str):
        return self._get(path("permissions", vhost, user), model(PermissionsInfo))

    def declare_permissions(self, params: Permissions):
        return self._put(path("permissions", params.vhost, params.user), params.to_body())

    def grant_permissions(self, params: Permissions):
        return self.declare_permissions(params)

    def grant_full_permissions(self, user: str, vhost: str):
        """Grants ``.*`` for configure, write and read."""
        return self.declare_permissions(Permissions.full(user, vhost))

    def clear_permissions(self, vhost: str, user: str, idempotently: bool = False):
        return self._delete(path("permissions", vhost, user), idempotently)

    def list_topic_permissions(self):
        return self._get("topic-permissions", model_list(TopicPermission))

    def list_topic_permissions_in(self, vhost: str):
        return self._get(path("vhosts", vhost, "topic-permissions"), model_list(TopicPermission))

    def list_topic_permissions_of(self, user: str):
        return self._get(path("users", user, "topic-permissions"), model_list(TopicPermission))

    def get_topic_permissions_of(self, vhost: str, user: str):
        """
        The endpoint answers with an array; returns its first element.

        Raises:
            NotFound: the array is empty
        """
        return self._get(path("topic-permissions", vhost, user), first_or_not_found(TopicPermission))

    def declare_topic_permissions(self, params: TopicPermissions):
        return self._put(path("topic-permissions", params.vhost, params.user), params.to_body())

    def clear_topic_permissions(self, vhost: str, user: str, idempotently: bool = False):
        return self._delete(path("topic-permissions", vhost, user), idempotently)
