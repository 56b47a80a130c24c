"""
Federation upstream payloads.

Upstreams are runtime parameters of the ``federation-upstream`` component;
:meth:`FederationUpstreamParams.to_runtime_parameter` produces the value
with the broker's hyphenated keys.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..commons import (
    ChannelUseMode,
    FederationResourceCleanupMode,
    MessageTransferAcknowledgementMode,
    QueueType,
)
from .parameters import RuntimeParameterDefinition

FEDERATION_UPSTREAM_COMPONENT = "federation-upstream"

DEFAULT_FEDERATION_PREFETCH = 1000
DEFAULT_FEDERATION_RECONNECT_DELAY = 5


@dataclass
class QueueFederationParams:
    queue: Optional[str] = None
    consumer_tag: Optional[str] = None


@dataclass
class ExchangeFederationParams:
    """``ttl`` is the internal queue TTL (``expires``), in milliseconds."""
    exchange: Optional[str] = None
    max_hops: Optional[int] = None
    queue_type: QueueType = QueueType.CLASSIC
    ttl: Optional[int] = None
    message_ttl: Optional[int] = None
    resource_cleanup_mode: FederationResourceCleanupMode = FederationResourceCleanupMode.DEFAULT


@dataclass
class FederationUpstreamParams:
    name: str
    vhost: str
    uri: str
    reconnect_delay: int = DEFAULT_FEDERATION_RECONNECT_DELAY
    trust_user_id: bool = False
    prefetch_count: int = DEFAULT_FEDERATION_PREFETCH
    ack_mode: MessageTransferAcknowledgementMode = MessageTransferAcknowledgementMode.WHEN_CONFIRMED
    bind_using_nowait: bool = False
    channel_use_mode: ChannelUseMode = ChannelUseMode.MULTIPLE
    queue_federation: Optional[QueueFederationParams] = None
    exchange_federation: Optional[ExchangeFederationParams] = None

    @classmethod
    def new_queue_federation_upstream(cls, vhost: str, name: str, uri: str,
                                      params: QueueFederationParams) -> "FederationUpstreamParams":
        return cls(name=name, vhost=vhost, uri=uri, queue_federation=params)

    @classmethod
    def new_exchange_federation_upstream(cls, vhost: str, name: str, uri: str,
                                         params: ExchangeFederationParams) -> "FederationUpstreamParams":
        return cls(name=name, vhost=vhost, uri=uri, exchange_federation=params)

    @classmethod
    def from_upstream(cls, upstream) -> "FederationUpstreamParams":
        """
        Params equivalent to a decoded upstream. Missing numeric settings take
        the broker defaults.
        """
        queue_federation = None
        if upstream.queue is not None or upstream.consumer_tag is not None:
            queue_federation = QueueFederationParams(upstream.queue, upstream.consumer_tag)

        exchange_federation = None
        if (upstream.exchange is not None
                or upstream.max_hops is not None
                or upstream.queue_type is not None
                or upstream.expires is not None
                or upstream.message_ttl is not None
                or upstream.resource_cleanup_mode != FederationResourceCleanupMode.DEFAULT):
            exchange_federation = ExchangeFederationParams(
                exchange=upstream.exchange,
                max_hops=upstream.max_hops,
                queue_type=upstream.queue_type or QueueType.CLASSIC,
                ttl=upstream.expires,
                message_ttl=upstream.message_ttl,
                resource_cleanup_mode=upstream.resource_cleanup_mode,
            )

        return cls(
            name=upstream.name,
            vhost=upstream.vhost,
            uri=upstream.uri,
            reconnect_delay=(DEFAULT_FEDERATION_RECONNECT_DELAY
                             if upstream.reconnect_delay is None else upstream.reconnect_delay),
            trust_user_id=bool(upstream.trust_user_id),
            prefetch_count=(DEFAULT_FEDERATION_PREFETCH
                            if upstream.prefetch_count is None else upstream.prefetch_count),
            ack_mode=upstream.ack_mode,
            bind_using_nowait=upstream.bind_using_nowait,
            channel_use_mode=upstream.channel_use_mode,
            queue_federation=queue_federation,
            exchange_federation=exchange_federation,
        )

    def to_runtime_parameter(self) -> RuntimeParameterDefinition:
        value: Dict[str, Any] = {
            "uri": self.uri,
            "prefetch-count": self.prefetch_count,
            "trust-user-id": self.trust_user_id,
            "reconnect-delay": self.reconnect_delay,
            "ack-mode": MessageTransferAcknowledgementMode(self.ack_mode).value,
            "bind-nowait": self.bind_using_nowait,
            "channel-use-mode": ChannelUseMode(self.channel_use_mode).value,
        }

        qf = self.queue_federation
        if qf is not None:
            if qf.queue is not None:
                value["queue"] = qf.queue
            if qf.consumer_tag is not None:
                value["consumer-tag"] = qf.consumer_tag

        ef = self.exchange_federation
        if ef is not None:
            value["queue-type"] = QueueType(ef.queue_type).value
            value["resource-cleanup-mode"] = FederationResourceCleanupMode(ef.resource_cleanup_mode).value
            optional = {
                "exchange": ef.exchange,
                "max-hops": ef.max_hops,
                "expires": ef.ttl,
                "message-ttl": ef.message_ttl,
            }
            value.update({k: v for k, v in optional.items() if v is not None})

        return RuntimeParameterDefinition(
            name=self.name,
            vhost=self.vhost,
            component=FEDERATION_UPSTREAM_COMPONENT,
            value=value,
        )
