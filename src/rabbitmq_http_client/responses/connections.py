"""Connection, channel and consumer responses."""

from typing import Any, Dict, Optional

from pydantic import Field

from ..commons import OpenEnum, open_enum
from .base import ApiModel, PossiblyEmpty
from .queues import ConnectionDetails, NameAndVirtualHost


class ChannelState(OpenEnum):
    STARTING = "starting"
    RUNNING = "running"
    CLOSING = "closing"


class ClientCapabilities(ApiModel):
    authentication_failure_close: bool = False
    basic_nack: bool = Field(default=False, alias="basic.nack")
    connection_blocked: bool = Field(default=False, alias="connection.blocked")
    consumer_cancel_notify: bool = False
    exchange_to_exchange_bindings: bool = Field(default=False, alias="exchange_exchange_bindings")
    publisher_confirms: bool = False


class ClientProperties(ApiModel):
    connection_name: str = ""
    platform: str = ""
    product: str = ""
    version: str = ""
    capabilities: Optional[ClientCapabilities] = None


class Connection(ApiModel):
    name: str
    node: str
    state: Optional[str] = None
    protocol: str = ""
    username: str = Field(alias="user")
    vhost: Optional[str] = None
    connected_at: Optional[int] = None
    server_hostname: Optional[str] = Field(default=None, alias="host")
    server_port: Optional[int] = Field(default=None, alias="port")
    client_hostname: Optional[str] = Field(default=None, alias="peer_host")
    client_port: Optional[int] = Field(default=None, alias="peer_port")
    channel_max: Optional[int] = None
    channel_count: int = Field(default=0, alias="channels")
    client_properties: PossiblyEmpty[ClientProperties] = None


class UserConnection(ApiModel):
    name: str
    node: str
    username: str = Field(alias="user")
    vhost: str


class StreamConnection(ApiModel):
    name: str
    node: str
    vhost: str
    username: str = Field(alias="user")
    protocol: str = ""
    connected_at: Optional[int] = None
    client_hostname: Optional[str] = Field(default=None, alias="peer_host")
    client_port: Optional[int] = Field(default=None, alias="peer_port")
    frame_max: Optional[int] = None
    heartbeat: Optional[int] = None
    client_properties: Dict[str, Any] = {}


class ChannelDetails(ApiModel):
    id: int = Field(alias="number")
    name: str
    connection_name: str = ""
    node: str = ""
    client_hostname: Optional[str] = Field(default=None, alias="peer_host")
    client_port: Optional[int] = Field(default=None, alias="peer_port")
    username: str = Field(default="", alias="user")


class Channel(ApiModel):
    id: int = Field(alias="number")
    name: str
    connection_details: PossiblyEmpty[ConnectionDetails] = None
    vhost: str
    state: open_enum(ChannelState) = ChannelState.RUNNING
    consumer_count: int = 0
    has_publisher_confirms_enabled: bool = Field(default=False, alias="confirm")
    prefetch_count: int = 0
    messages_unacknowledged: int = 0
    messages_unconfirmed: int = 0


class Consumer(ApiModel):
    consumer_tag: str
    active: bool = True
    manual_ack: bool = Field(default=True, alias="ack_required")
    prefetch_count: int = 0
    exclusive: bool = False
    arguments: Dict[str, Any] = {}
    delivery_ack_timeout: Optional[int] = Field(default=None, alias="consumer_timeout")
    queue: NameAndVirtualHost
    channel_details: PossiblyEmpty[ChannelDetails] = None
