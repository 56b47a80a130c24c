"""Queue and stream declaration payloads."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from ..commons import X_ARGUMENT_KEY_X_QUEUE_TYPE, QueueType

XArguments = Optional[Dict[str, Any]]


@dataclass
class QueueParams:
    """
    Body of ``PUT queues/{vhost}/{name}``.

    The queue type travels as the ``x-queue-type`` argument; ``name`` is
    part of the path and is not serialized.
    """
    name: str
    queue_type: Optional[QueueType] = QueueType.CLASSIC
    durable: bool = True
    auto_delete: bool = False
    exclusive: bool = False
    arguments: XArguments = None

    @classmethod
    def new(cls, name: str, queue_type: QueueType, durable: bool, auto_delete: bool,
            arguments: XArguments = None) -> "QueueParams":
        return cls(name=name, queue_type=QueueType(queue_type), durable=durable,
                   auto_delete=auto_delete, arguments=dict(arguments) if arguments else None)

    @classmethod
    def new_quorum_queue(cls, name: str, arguments: XArguments = None) -> "QueueParams":
        return cls.new(name, QueueType.QUORUM, True, False, arguments)

    @classmethod
    def new_stream(cls, name: str, arguments: XArguments = None) -> "QueueParams":
        return cls.new(name, QueueType.STREAM, True, False, arguments)

    @classmethod
    def new_durable_classic_queue(cls, name: str, arguments: XArguments = None) -> "QueueParams":
        return cls.new(name, QueueType.CLASSIC, True, False, arguments)

    @classmethod
    def new_transient_autodelete(cls, name: str, arguments: XArguments = None) -> "QueueParams":
        return cls.new(name, QueueType.CLASSIC, False, True, arguments)

    @classmethod
    def from_queue_info(cls, info) -> "QueueParams":
        """Params that redeclare a queue returned by the API."""
        return cls(
            name=info.name,
            queue_type=QueueType(info.queue_type) if info.queue_type else None,
            durable=info.durable,
            auto_delete=info.auto_delete,
            exclusive=info.exclusive,
            arguments=dict(info.arguments) if info.arguments else None,
        )

    def with_argument(self, key: str, value: Any) -> "QueueParams":
        arguments = dict(self.arguments or {})
        arguments[key] = value
        return replace(self, arguments=arguments)

    def with_message_ttl(self, millis: int) -> "QueueParams":
        return self.with_argument("x-message-ttl", millis)

    def with_queue_ttl(self, millis: int) -> "QueueParams":
        return self.with_argument("x-expires", millis)

    def with_max_length(self, max_length: int) -> "QueueParams":
        return self.with_argument("x-max-length", max_length)

    def with_max_length_bytes(self, max_length_bytes: int) -> "QueueParams":
        return self.with_argument("x-max-length-bytes", max_length_bytes)

    def with_dead_letter_exchange(self, exchange: str) -> "QueueParams":
        return self.with_argument("x-dead-letter-exchange", exchange)

    def with_dead_letter_routing_key(self, routing_key: str) -> "QueueParams":
        return self.with_argument("x-dead-letter-routing-key", routing_key)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "durable": self.durable,
            "auto_delete": self.auto_delete,
            "exclusive": self.exclusive,
        }
        arguments: Dict[str, Any] = {}
        if self.queue_type is not None:
            arguments[X_ARGUMENT_KEY_X_QUEUE_TYPE] = self.queue_type.value
        if self.arguments:
            arguments.update(self.arguments)
        if arguments:
            body["arguments"] = arguments
        return body


@dataclass
class StreamParams:
    """
    Stream declaration. ``expiration`` is a retention period such as
    ``"7D"`` or ``"12h"`` (``x-max-age``).
    """
    name: str
    expiration: Optional[str] = None
    max_length_bytes: Optional[int] = None
    max_segment_length_bytes: Optional[int] = None
    arguments: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def with_expiration_and_length_limit(cls, name: str, expiration: str,
                                         max_length_bytes: int) -> "StreamParams":
        return cls(name=name, expiration=expiration, max_length_bytes=max_length_bytes)

    def with_max_length_bytes(self, value: int) -> "StreamParams":
        return replace(self, max_length_bytes=value)

    def with_max_segment_length_bytes(self, value: int) -> "StreamParams":
        return replace(self, max_segment_length_bytes=value)

    def with_argument(self, key: str, value: Any) -> "StreamParams":
        return replace(self, arguments={**self.arguments, key: value})

    def to_queue_params(self) -> QueueParams:
        arguments = dict(self.arguments)
        if self.expiration:
            arguments["x-max-age"] = self.expiration
        if self.max_length_bytes is not None:
            arguments["x-max-length-bytes"] = self.max_length_bytes
        if self.max_segment_length_bytes is not None:
            arguments["x-stream-max-segment-size-bytes"] = self.max_segment_length_bytes
        return QueueParams.new_stream(self.name, arguments)
