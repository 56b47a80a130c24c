"""Bindings."""

from typing import Any, Dict, Optional

from ..commons import BindingDestinationType
from ..params.bindings import BindingDeletionParams, binding_body
from ..paths import path
from ..responses.definitions import BindingInfo
from .base import ApiBase, model_list


def binding_path(vhost: str, source: str, destination_type: BindingDestinationType,
                 destination: str, properties_key: Optional[str] = None) -> str:
    """``bindings/{vhost}/e/{source}/{q|e}/{destination}[/{properties_key}]``."""
    segments = ["bindings", vhost, "e", source,
                BindingDestinationType(destination_type).path_abbreviation(), destination]
    if properties_key is not None:
        segments.append(properties_key)
    return path(*segments)


def candidate_bindings_path(params: BindingDeletionParams) -> str:
    """Lists the bindings that can match ``params``: those of its destination."""
    if BindingDestinationType(params.destination_type) is BindingDestinationType.QUEUE:
        return path("queues", params.virtual_host, params.destination, "bindings")
    return path("exchanges", params.virtual_host, params.destination, "bindings", "destination")


class BindingsApi(ApiBase):

    def list_bindings(self):
        return self._get("bindings", model_list(BindingInfo))

    def list_bindings_in(self, vhost: str):
        return self._get(path("bindings", vhost), model_list(BindingInfo))

    def list_queue_bindings(self, vhost: str, queue: str):
        return self._get(path("queues", vhost, queue, "bindings"), model_list(BindingInfo))

    def list_exchange_bindings_with_source(self, vhost: str, exchange: str):
        return self._get(path("exchanges", vhost, exchange, "bindings", "source"),
                         model_list(BindingInfo))

    def list_exchange_bindings_with_destination(self, vhost: str, exchange: str):
        return self._get(path("exchanges", vhost, exchange, "bindings", "destination"),
                         model_list(BindingInfo))

    def bind_queue(self, vhost: str, queue: str, exchange: str,
                   routing_key: Optional[str] = None, arguments: Optional[Dict[str, Any]] = None):
        """Binds ``queue`` to ``exchange``. Unset routing key and arguments are not sent."""
        return self._post(binding_path(vhost, exchange, BindingDestinationType.QUEUE, queue),
                          binding_body(routing_key, arguments))

    def bind_exchange(self, vhost: str, destination: str, source: str,
                      routing_key: Optional[str] = None, arguments: Optional[Dict[str, Any]] = None):
        return self._post(binding_path(vhost, source, BindingDestinationType.EXCHANGE, destination),
                          binding_body(routing_key, arguments))

    def recreate_binding(self, binding: BindingInfo):
        """Declares a binding equal to one returned by a list operation."""
        arguments = binding.arguments.root or None
        if binding.destination_type is BindingDestinationType.QUEUE:
            return self.bind_queue(binding.vhost, binding.destination, binding.source,
                                   binding.routing_key, arguments)
        return self.bind_exchange(binding.vhost, binding.destination, binding.source,
                                  binding.routing_key, arguments)
