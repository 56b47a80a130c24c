"""
Shared enumerations.

Most string-valued fields the broker returns are open-ended: new releases
and plugins add values. Those enums derive from :class:`OpenEnum`, which
turns an unrecognised string into an ``UNKNOWN`` pseudo-member that still
carries (and compares equal to) the raw value instead of failing to decode.
"""

from enum import Enum
from typing import Annotated, Any, Optional, Type, TypeVar

from pydantic import PlainSerializer, PlainValidator

E = TypeVar("E", bound="OpenEnum")


class OpenEnum(str, Enum):
    """String enum with an ``UNKNOWN`` fallback that keeps the raw value."""

    @classmethod
    def _missing_(cls, value: Any):
        if not isinstance(value, str):
            return None
        lowered = value.lower()
        for member in cls:
            if member.value == lowered:
                return member
        pseudo_member = str.__new__(cls, value)
        pseudo_member._name_ = "UNKNOWN"
        pseudo_member._value_ = value
        return pseudo_member

    @property
    def is_unknown(self) -> bool:
        return self._name_ == "UNKNOWN"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse_or(cls: Type[E], value: Optional[str], default: E) -> E:
        """Parse ``value``; None and unknown values yield ``default``."""
        if value is None:
            return default
        parsed = cls(value)
        return default if parsed.is_unknown else parsed


def open_enum(enum_cls: Type[E]):
    """
    Pydantic field type that decodes through the enum's UNKNOWN fallback
    and serializes back to the raw string.
    """
    return Annotated[
        enum_cls,
        PlainValidator(lambda v: v if isinstance(v, enum_cls) else enum_cls(v)),
        PlainSerializer(lambda v: v.value, return_type=str),
    ]


class ExchangeType(OpenEnum):
    FANOUT = "fanout"
    TOPIC = "topic"
    DIRECT = "direct"
    HEADERS = "headers"
    CONSISTENT_HASHING = "x-consistent-hash"
    MODULUS_HASH = "x-modulus-hash"
    RANDOM = "x-random"
    LOCAL_RANDOM = "x-local-random"
    JMS_TOPIC = "x-jms-topic"
    RECENT_HISTORY = "x-recent-history"
    DELAYED_MESSAGE = "x-delayed-message"
    MESSAGE_DEDUPLICATION = "x-message-deduplication"


class PolicyTarget(OpenEnum):
    """What kinds of objects a policy applies to (the ``apply-to`` key)."""

    QUEUES = "queues"
    CLASSIC_QUEUES = "classic_queues"
    QUORUM_QUEUES = "quorum_queues"
    STREAMS = "streams"
    EXCHANGES = "exchanges"
    ALL = "all"

    def does_apply_to(self, target: "PolicyTarget") -> bool:
        """
        ``all`` covers everything, ``queues`` covers every queue kind,
        the remaining targets only cover themselves.
        """
        if self is PolicyTarget.ALL:
            return True
        if self is PolicyTarget.QUEUES:
            return target in _QUEUE_TARGETS
        return self == target


_QUEUE_TARGETS = frozenset({
    PolicyTarget.QUEUES,
    PolicyTarget.CLASSIC_QUEUES,
    PolicyTarget.QUORUM_QUEUES,
    PolicyTarget.STREAMS,
})


class QueueType(OpenEnum):
    """Value of the ``x-queue-type`` argument."""

    CLASSIC = "classic"
    QUORUM = "quorum"
    STREAM = "stream"
    DELAYED = "delayed"

    @property
    def policy_target(self) -> PolicyTarget:
        return {
            QueueType.CLASSIC: PolicyTarget.CLASSIC_QUEUES,
            QueueType.QUORUM: PolicyTarget.QUORUM_QUEUES,
            QueueType.STREAM: PolicyTarget.STREAMS,
        }.get(self, PolicyTarget.QUEUES)


class BindingDestinationType(str, Enum):
    QUEUE = "queue"
    EXCHANGE = "exchange"

    def path_abbreviation(self) -> str:
        """``q`` or ``e``, as used in binding paths."""
        return "q" if self is BindingDestinationType.QUEUE else "e"

    def __str__(self) -> str:
        return self.value


class VirtualHostLimitTarget(OpenEnum):
    MAX_CONNECTIONS = "max-connections"
    MAX_QUEUES = "max-queues"


class UserLimitTarget(OpenEnum):
    MAX_CONNECTIONS = "max-connections"
    MAX_CHANNELS = "max-channels"


class TlsPeerVerificationMode(str, Enum):
    ENABLED = "verify_peer"
    DISABLED = "verify_none"

    def __str__(self) -> str:
        return self.value


class MessageTransferAcknowledgementMode(OpenEnum):
    """``ack-mode`` of federation upstreams and shovels."""

    WHEN_CONFIRMED = "on-confirm"
    WHEN_PUBLISHED = "on-publish"
    IMMEDIATE = "no-ack"


class FederationResourceCleanupMode(OpenEnum):
    DEFAULT = "default"
    NEVER = "never"


class ChannelUseMode(OpenEnum):
    MULTIPLE = "multiple"
    SINGLE = "single"


class MessagingProtocol(OpenEnum):
    """Shovel endpoint protocol."""

    AMQP091 = "amqp091"
    AMQP10 = "amqp10"
    LOCAL = "local"


class SupportedProtocol(OpenEnum):
    """Listener protocols, as reported by nodes and accepted by health checks."""

    CLUSTERING = "clustering"
    AMQP = "amqp"
    AMQP_WITH_TLS = "amqp/ssl"
    STREAM = "stream"
    STREAM_WITH_TLS = "stream/ssl"
    MQTT = "mqtt"
    MQTT_WITH_TLS = "mqtt/ssl"
    STOMP = "stomp"
    STOMP_WITH_TLS = "stomp/ssl"
    AMQP_OVER_WEBSOCKETS = "http/web-amqp"
    AMQP_OVER_WEBSOCKETS_WITH_TLS = "https/web-amqp"
    MQTT_OVER_WEBSOCKETS = "http/web-mqtt"
    MQTT_OVER_WEBSOCKETS_WITH_TLS = "https/web-mqtt"
    STOMP_OVER_WEBSOCKETS = "http/web-stomp"
    STOMP_OVER_WEBSOCKETS_WITH_TLS = "https/web-stomp"
    PROMETHEUS = "http/prometheus"
    PROMETHEUS_WITH_TLS = "https/prometheus"
    HTTP = "http"
    HTTPS = "https"


class MessageAckMode(str, Enum):
    """``ackmode`` of the get-messages endpoint."""

    ACK_REQUEUE_TRUE = "ack_requeue_true"
    ACK_REQUEUE_FALSE = "ack_requeue_false"
    REJECT_REQUEUE_TRUE = "reject_requeue_true"
    REJECT_REQUEUE_FALSE = "reject_requeue_false"


X_ARGUMENT_KEY_X_QUEUE_TYPE = "x-queue-type"
X_ARGUMENT_KEY_X_OVERFLOW = "x-overflow"
