"""Exchanges."""

from typing import Optional

from ..pagination import PaginationParams
from ..params.exchanges import ExchangeParams
from ..paths import path
from ..responses.definitions import ExchangeInfo
from .base import ApiBase, model, model_list, page_query, paged


class ExchangesApi(ApiBase):

    def list_exchanges(self):
        return self._get("exchanges", model_list(ExchangeInfo))

    def list_exchanges_paged(self, pagination: Optional[PaginationParams] = None):
        return self._get("exchanges", paged(ExchangeInfo), query=page_query(pagination))

    def list_exchanges_in(self, vhost: str):
        return self._get(path("exchanges", vhost), model_list(ExchangeInfo))

    def list_exchanges_in_paged(self, vhost: str, pagination: Optional[PaginationParams] = None):
        return self._get(path("exchanges", vhost), paged(ExchangeInfo), query=page_query(pagination))

    def get_exchange_info(self, vhost: str, name: str):
        return self._get(path("exchanges", vhost, name), model(ExchangeInfo))

    def declare_exchange(self, vhost: str, params: ExchangeParams):
        return self._put(path("exchanges", vhost, params.name), params.to_body())

    def delete_exchange(self, vhost: str, name: str, idempotently: bool = False):
        return self._delete(path("exchanges", vhost, name), idempotently)
