"""
Federation upstreams and links.

Upstreams are not a dedicated endpoint: they are runtime parameters of the
``federation-upstream`` component. :meth:`FederationUpstream.from_runtime_parameter`
turns one into a typed record.
"""

from typing import Optional

from pydantic import Field

from ..commons import (
    ChannelUseMode,
    FederationResourceCleanupMode,
    MessageTransferAcknowledgementMode,
    OpenEnum,
    QueueType,
    open_enum,
)
from ..core.exceptions import ConversionError
from ..conversions import (
    optional_bool,
    optional_int,
    optional_str,
    parse_enum_or_default,
)
from .base import ApiModel


class FederationType(OpenEnum):
    EXCHANGE = "exchange"
    QUEUE = "queue"


class FederationUpstream(ApiModel):
    name: str
    vhost: str
    uri: str
    ack_mode: open_enum(MessageTransferAcknowledgementMode) = MessageTransferAcknowledgementMode.WHEN_CONFIRMED
    prefetch_count: Optional[int] = None
    trust_user_id: Optional[bool] = None
    reconnect_delay: Optional[int] = None
    queue: Optional[str] = None
    consumer_tag: Optional[str] = None
    exchange: Optional[str] = None
    max_hops: Optional[int] = None
    queue_type: Optional[open_enum(QueueType)] = None
    expires: Optional[int] = None
    message_ttl: Optional[int] = None
    resource_cleanup_mode: open_enum(FederationResourceCleanupMode) = FederationResourceCleanupMode.DEFAULT
    bind_using_nowait: bool = False
    channel_use_mode: open_enum(ChannelUseMode) = ChannelUseMode.MULTIPLE

    @classmethod
    def from_runtime_parameter(cls, param) -> "FederationUpstream":
        """
        Build from a ``federation-upstream`` runtime parameter.

        Raises:
            ConversionError: the value has no ``uri``
        """
        values = param.value or {}
        uri = values.get("uri")
        if not isinstance(uri, str):
            raise ConversionError.missing_property("uri")
        owner = f"{param.vhost}/{param.name}"

        queue_type = None
        if values.get("queue-type") is not None:
            queue_type = parse_enum_or_default(QueueType, values, "queue-type", QueueType.CLASSIC, owner)

        return cls(
            name=param.name,
            vhost=param.vhost,
            uri=uri,
            ack_mode=parse_enum_or_default(
                MessageTransferAcknowledgementMode, values, "ack-mode",
                MessageTransferAcknowledgementMode.WHEN_CONFIRMED, owner),
            prefetch_count=optional_int(values, "prefetch-count"),
            trust_user_id=optional_bool(values, "trust-user-id"),
            reconnect_delay=optional_int(values, "reconnect-delay"),
            queue=optional_str(values, "queue"),
            consumer_tag=optional_str(values, "consumer-tag"),
            exchange=optional_str(values, "exchange"),
            max_hops=optional_int(values, "max-hops"),
            queue_type=queue_type,
            expires=optional_int(values, "expires"),
            message_ttl=optional_int(values, "message-ttl"),
            resource_cleanup_mode=parse_enum_or_default(
                FederationResourceCleanupMode, values, "resource-cleanup-mode",
                FederationResourceCleanupMode.DEFAULT, owner),
            bind_using_nowait=bool(optional_bool(values, "bind-nowait")),
            channel_use_mode=parse_enum_or_default(
                ChannelUseMode, values, "channel-use-mode", ChannelUseMode.MULTIPLE, owner),
        )


class FederationLink(ApiModel):
    node: str
    vhost: str
    id: str = ""
    uri: str = ""
    status: str = ""
    typ: open_enum(FederationType) = Field(default=FederationType.EXCHANGE, alias="type")
    upstream: str = ""
    consumer_tag: Optional[str] = None
    exchange: Optional[str] = None
    queue: Optional[str] = None
    error: Optional[str] = None
