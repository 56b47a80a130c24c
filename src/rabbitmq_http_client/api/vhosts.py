"""Virtual hosts."""

from typing import Optional

from ..pagination import PaginationParams
from ..params.vhosts import VirtualHostParams
from ..paths import path
from ..responses.vhosts import VirtualHost
from .base import ApiBase, model, model_list, page_query, paged


class VirtualHostsApi(ApiBase):

    def list_vhosts(self):
        return self._get("vhosts", model_list(VirtualHost))

    def list_vhosts_paged(self, pagination: Optional[PaginationParams] = None):
        return self._get("vhosts", paged(VirtualHost), query=page_query(pagination))

    def get_vhost(self, name: str):
        return self._get(path("vhosts", name), model(VirtualHost))

    def create_vhost(self, params: VirtualHostParams):
        return self._put(path("vhosts", params.name), params.to_body())

    def update_vhost(self, params: VirtualHostParams):
        """Same request as :meth:`create_vhost`: the endpoint is an upsert."""
        return self._put(path("vhosts", params.name), params.to_body())

    def delete_vhost(self, name: str, idempotently: bool = False):
        return self._delete(path("vhosts", name), idempotently)

    def enable_vhost_deletion_protection(self, name: str):
        return self._post(path("vhosts", name, "deletion", "protection"))

    def disable_vhost_deletion_protection(self, name: str):
        return self._delete(path("vhosts", name, "deletion", "protection"))
