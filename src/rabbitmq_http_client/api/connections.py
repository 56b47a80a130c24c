"""Connections, channels, consumers and stream publishers/consumers."""

from typing import Dict, Optional

from ..core.error_handler import ErrorHandler
from ..pagination import PaginationParams
from ..paths import path
from ..responses.connections import Channel, Connection, Consumer, StreamConnection, UserConnection
from ..responses.queues import StreamConsumer, StreamPublisher
from .base import ApiBase, model, model_list, page_query, paged

REASON_HEADER = "X-Reason"


def _reason_headers(reason: Optional[str]) -> Dict[str, str]:
    if reason is None:
        return {}
    return {REASON_HEADER: ErrorHandler.validate_header_value(REASON_HEADER, reason)}


class ConnectionsApi(ApiBase):

    # Connections

    def list_connections(self):
        return self._get("connections", model_list(Connection))

    def list_connections_paged(self, pagination: Optional[PaginationParams] = None):
        return self._get("connections", paged(Connection), query=page_query(pagination))

    def list_connections_in(self, vhost: str):
        return self._get(path("vhosts", vhost, "connections"), model_list(Connection))

    def list_user_connections(self, username: str):
        return self._get(path("connections", "username", username), model_list(UserConnection))

    def get_connection_info(self, name: str):
        return self._get(path("connections", name), model(Connection))

    def close_connection(self, name: str, reason: Optional[str] = None, idempotently: bool = False):
        """
        Closes a client connection. ``reason`` is sent as the ``X-Reason``
        header and shows up in the client's connection error.

        Raises:
            InvalidHeaderValue: ``reason`` cannot be sent as a header
        """
        return self._delete(path("connections", name), idempotently, headers=_reason_headers(reason))

    def close_user_connections(self, username: str, reason: Optional[str] = None,
                               idempotently: bool = False):
        return self._delete(path("connections", "username", username), idempotently,
                            headers=_reason_headers(reason))

    def list_stream_connections(self):
        return self._get(path("stream", "connections"), model_list(StreamConnection))

    def list_stream_connections_in(self, vhost: str):
        return self._get(path("stream", "connections", vhost), model_list(StreamConnection))

    def get_stream_connection_info(self, vhost: str, name: str):
        return self._get(path("stream", "connections", vhost, name), model(StreamConnection))

    # Channels

    def list_channels(self):
        return self._get("channels", model_list(Channel))

    def list_channels_paged(self, pagination: Optional[PaginationParams] = None):
        return self._get("channels", paged(Channel), query=page_query(pagination))

    def list_channels_in(self, vhost: str):
        return self._get(path("vhosts", vhost, "channels"), model_list(Channel))

    def list_channels_on(self, connection_name: str):
        return self._get(path("connections", connection_name, "channels"), model_list(Channel))

    def get_channel_info(self, name: str):
        return self._get(path("channels", name), model(Channel))

    # Consumers

    def list_consumers(self):
        return self._get("consumers", model_list(Consumer))

    def list_consumers_in(self, vhost: str):
        return self._get(path("consumers", vhost), model_list(Consumer))

    # Stream publishers and consumers

    def list_stream_publishers(self):
        return self._get(path("stream", "publishers"), model_list(StreamPublisher))

    def list_stream_publishers_in(self, vhost: str):
        return self._get(path("stream", "publishers", vhost), model_list(StreamPublisher))

    def list_stream_publishers_of(self, vhost: str, stream: str):
        return self._get(path("stream", "publishers", vhost, stream), model_list(StreamPublisher))

    def list_stream_publishers_on_connection(self, vhost: str, connection_name: str):
        return self._get(path("stream", "connections", vhost, connection_name, "publishers"),
                         model_list(StreamPublisher))

    def list_stream_consumers(self):
        return self._get(path("stream", "consumers"), model_list(StreamConsumer))

    def list_stream_consumers_in(self, vhost: str):
        return self._get(path("stream", "consumers", vhost), model_list(StreamConsumer))

    def list_stream_consumers_on_connection(self, vhost: str, connection_name: str):
        return self._get(path("stream", "connections", vhost, connection_name, "consumers"),
                         model_list(StreamConsumer))
