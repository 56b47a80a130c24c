"""Users of the internal database."""

from typing import Iterable, Optional

from ..pagination import PaginationParams
from ..params.users import BulkUserDelete, UserParams
from ..paths import path
from ..responses.users import CurrentUser, User
from .base import ApiBase, model, model_list, page_query, paged


class UsersApi(ApiBase):

    def list_users(self):
        return self._get("users", model_list(User))

    def list_users_paged(self, pagination: Optional[PaginationParams] = None):
        return self._get("users", paged(User), query=page_query(pagination))

    def list_users_without_permissions(self):
        """Users that have no permissions in any virtual host."""
        return self._get(path("users", "without-permissions"), model_list(User))

    def get_user(self, name: str):
        return self._get(path("users", name), model(User))

    def current_user(self):
        """The user the client authenticates as (``GET whoami``)."""
        return self._get("whoami", model(CurrentUser))

    def create_user(self, params: UserParams):
        return self._put(path("users", params.name), params.to_body())

    def delete_user(self, name: str, idempotently: bool = False):
        return self._delete(path("users", name), idempotently)

    def delete_users(self, usernames: Iterable[str]):
        """Deletes several users with a single request; missing users are ignored by the broker."""
        return self._post(path("users", "bulk-delete"), BulkUserDelete(list(usernames)).to_body())
