"""Queues, streams and messages."""

from typing import Any, Dict, Optional

from ..commons import MessageAckMode
from ..pagination import PaginationParams
from ..params.queues import QueueParams, StreamParams
from ..paths import path
from ..responses.queues import DetailedQueueInfo, GetMessage, MessageRouted, QueueInfo
from .base import ApiBase, model, model_list, page_query, paged


class QueuesApi(ApiBase):

    def list_queues(self):
        return self._get("queues", model_list(QueueInfo))

    def list_queues_in(self, vhost: str):
        return self._get(path("queues", vhost), model_list(QueueInfo))

    def list_queues_paged(self, pagination: Optional[PaginationParams] = None):
        return self._get("queues", paged(QueueInfo), query=page_query(pagination))

    def list_queues_in_paged(self, vhost: str, pagination: Optional[PaginationParams] = None):
        return self._get(path("queues", vhost), paged(QueueInfo), query=page_query(pagination))

    def list_queues_with_details(self):
        return self._get(path("queues", "detailed"), model_list(DetailedQueueInfo))

    def get_queue_info(self, vhost: str, name: str):
        return self._get(path("queues", vhost, name), model(QueueInfo))

    def get_stream_info(self, vhost: str, name: str):
        """Streams are listed and fetched through the queue endpoints."""
        return self.get_queue_info(vhost, name)

    def declare_queue(self, vhost: str, params: QueueParams):
        return self._put(path("queues", vhost, params.name), params.to_body())

    def declare_stream(self, vhost: str, params: StreamParams):
        return self._put(path("queues", vhost, params.name), params.to_queue_params().to_body())

    def delete_queue(self, vhost: str, name: str, idempotently: bool = False):
        return self._delete(path("queues", vhost, name), idempotently)

    def delete_stream(self, vhost: str, name: str, idempotently: bool = False):
        return self.delete_queue(vhost, name, idempotently)

    def purge_queue(self, vhost: str, name: str):
        return self._delete(path("queues", vhost, name, "contents"))

    # Messages

    def publish_message(self, vhost: str, exchange: str, routing_key: str, payload: str,
                        properties: Optional[Dict[str, Any]] = None):
        """
        Publishes a message through the HTTP API. Meant for tests and
        troubleshooting, not for production publishing.

        Returns:
            MessageRouted: whether the message was routed to at least one queue
        """
        body = {
            "routing_key": routing_key,
            "payload": payload,
            "payload_encoding": "string",
            "properties": properties or {},
        }
        return self._post(path("exchanges", vhost, exchange, "publish"), body, model(MessageRouted))

    def get_messages(self, vhost: str, queue: str, count: int,
                     ack_mode: MessageAckMode = MessageAckMode.ACK_REQUEUE_TRUE):
        """Fetches up to ``count`` messages. Destructive unless the ack mode requeues."""
        body = {"count": count, "ackmode": MessageAckMode(ack_mode).value, "encoding": "auto"}
        return self._post(path("queues", vhost, queue, "get"), body, model_list(GetMessage))
