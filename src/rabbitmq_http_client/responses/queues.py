"""Queue, stream and message responses."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from ..commons import PolicyTarget, QueueType
from .base import ApiModel, PossiblyEmpty


class NameAndVirtualHost(ApiModel):
    name: str
    vhost: str


class QueueInfo(ApiModel):
    """
    Queue or stream as listed by ``GET queues``. Counters the broker does not
    report (e.g. while a queue is down) decode to zero.
    """
    name: str
    vhost: str
    queue_type: str = Field(default="classic", alias="type")
    durable: bool = True
    auto_delete: bool = False
    exclusive: bool = False
    arguments: Dict[str, Any] = {}
    node: str = "undefined"
    state: str = ""
    leader: Optional[str] = None
    members: Optional[List[str]] = None
    online: Optional[List[str]] = None
    memory: int = 0
    consumer_count: int = Field(default=0, alias="consumers")
    consumer_utilisation: float = 0.0
    exclusive_consumer_tag: Optional[str] = None
    policy: Optional[str] = None
    message_bytes: int = 0
    message_bytes_persistent: int = 0
    message_bytes_ram: int = 0
    message_bytes_ready: int = 0
    message_bytes_unacknowledged: int = 0
    message_count: int = Field(default=0, alias="messages")
    on_disk_message_count: int = Field(default=0, alias="messages_persistent")
    in_memory_message_count: int = Field(default=0, alias="messages_ram")
    unacknowledged_message_count: int = Field(default=0, alias="messages_unacknowledged")

    @property
    def policy_target(self) -> PolicyTarget:
        return QueueType(self.queue_type).policy_target


class DetailedQueueInfo(QueueInfo):
    """``GET queues/detailed``: adds garbage collection and rate details."""
    garbage_collection: Optional[Dict[str, Any]] = None
    message_stats: PossiblyEmpty[Dict[str, Any]] = None


class GetMessage(ApiModel):
    payload_bytes: int = 0
    redelivered: bool = False
    exchange: str = ""
    routing_key: str = ""
    message_count: int = 0
    properties: Dict[str, Any] = {}
    payload: str = ""
    payload_encoding: str = "string"


class MessageRouted(ApiModel):
    routed: bool


class ConnectionDetails(ApiModel):
    name: str
    client_hostname: Optional[str] = Field(default=None, alias="peer_host")
    client_port: Optional[int] = Field(default=None, alias="peer_port")


class StreamPublisher(ApiModel):
    connection_details: PossiblyEmpty[ConnectionDetails] = None
    queue: NameAndVirtualHost
    reference: str = ""
    publisher_id: int = 0
    published: int = 0
    confirmed: int = 0
    errored: int = 0


class StreamConsumer(ApiModel):
    connection_details: PossiblyEmpty[ConnectionDetails] = None
    queue: NameAndVirtualHost
    subscription_id: int = 0
    credits: int = 0
    consumed: int = 0
    offset_lag: int = 0
    offset: int = 0
    properties: Dict[str, Any] = {}
