"""
Dynamic shovel payloads.

Shovels are runtime parameters of the ``shovel`` component. The typed
records convert to the broker's hyphenated keys (``src-uri``,
``dest-queue``, ``ack-mode``...), and :class:`ShovelParams` converts back
from a runtime parameter fetched from the API.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from ..commons import MessageTransferAcknowledgementMode, MessagingProtocol
from ..conversions import (
    optional_bool,
    optional_int,
    optional_str,
    parse_enum_or_default,
    required_str,
)
from .parameters import RuntimeParameterDefinition


SHOVEL_COMPONENT = "shovel"


@dataclass(frozen=True)
class Amqp091ShovelSourceParams:
    source_uri: str
    source_queue: Optional[str] = None
    source_exchange: Optional[str] = None
    source_exchange_routing_key: Optional[str] = None
    predeclared: bool = False

    @classmethod
    def queue_source(cls, uri: str, queue: str) -> "Amqp091ShovelSourceParams":
        return cls(source_uri=uri, source_queue=queue)

    @classmethod
    def exchange_source(cls, uri: str, exchange: str,
                        routing_key: Optional[str] = None) -> "Amqp091ShovelSourceParams":
        return cls(source_uri=uri, source_exchange=exchange, source_exchange_routing_key=routing_key)

    @classmethod
    def predeclared_queue_source(cls, uri: str, queue: str) -> "Amqp091ShovelSourceParams":
        return replace(cls.queue_source(uri, queue), predeclared=True)

    @classmethod
    def predeclared_exchange_source(cls, uri: str, exchange: str,
                                    routing_key: Optional[str] = None) -> "Amqp091ShovelSourceParams":
        return replace(cls.exchange_source(uri, exchange, routing_key), predeclared=True)


@dataclass(frozen=True)
class Amqp091ShovelDestinationParams:
    destination_uri: str
    destination_queue: Optional[str] = None
    destination_exchange: Optional[str] = None
    destination_exchange_routing_key: Optional[str] = None
    predeclared: bool = False

    @classmethod
    def queue_destination(cls, uri: str, queue: str) -> "Amqp091ShovelDestinationParams":
        return cls(destination_uri=uri, destination_queue=queue)

    @classmethod
    def exchange_destination(cls, uri: str, exchange: str,
                             routing_key: Optional[str] = None) -> "Amqp091ShovelDestinationParams":
        return cls(destination_uri=uri, destination_exchange=exchange,
                   destination_exchange_routing_key=routing_key)

    @classmethod
    def predeclared_queue_destination(cls, uri: str, queue: str) -> "Amqp091ShovelDestinationParams":
        return replace(cls.queue_destination(uri, queue), predeclared=True)

    @classmethod
    def predeclared_exchange_destination(cls, uri: str, exchange: str,
                                         routing_key: Optional[str] = None) -> "Amqp091ShovelDestinationParams":
        return replace(cls.exchange_destination(uri, exchange, routing_key), predeclared=True)


def _put_optional(value: Dict[str, Any], key: str, item: Any) -> None:
    if item is not None:
        value[key] = item


@dataclass(frozen=True)
class Amqp091ShovelParams:
    name: str
    vhost: str
    source: Amqp091ShovelSourceParams
    destination: Amqp091ShovelDestinationParams
    acknowledgement_mode: MessageTransferAcknowledgementMode = MessageTransferAcknowledgementMode.WHEN_CONFIRMED
    reconnect_delay: Optional[int] = None

    def to_runtime_parameter(self) -> RuntimeParameterDefinition:
        src, dest = self.source, self.destination
        value: Dict[str, Any] = {
            "src-protocol": MessagingProtocol.AMQP091.value,
            "dest-protocol": MessagingProtocol.AMQP091.value,
            "src-uri": src.source_uri,
        }
        _put_optional(value, "src-queue", src.source_queue)
        _put_optional(value, "src-exchange", src.source_exchange)
        _put_optional(value, "src-exchange-key", src.source_exchange_routing_key)
        value["dest-uri"] = dest.destination_uri
        value["ack-mode"] = MessageTransferAcknowledgementMode(self.acknowledgement_mode).value
        _put_optional(value, "dest-queue", dest.destination_queue)
        _put_optional(value, "dest-exchange", dest.destination_exchange)
        _put_optional(value, "dest-exchange-key", dest.destination_exchange_routing_key)
        if src.predeclared:
            value["src-predeclared"] = True
        if dest.predeclared:
            value["dest-predeclared"] = True
        _put_optional(value, "reconnect-delay", self.reconnect_delay)
        return RuntimeParameterDefinition(self.name, self.vhost, SHOVEL_COMPONENT, value)


@dataclass(frozen=True)
class Amqp10ShovelSourceParams:
    source_uri: str
    source_address: str


@dataclass(frozen=True)
class Amqp10ShovelDestinationParams:
    destination_uri: str
    destination_address: str


@dataclass(frozen=True)
class Amqp10ShovelParams:
    name: str
    vhost: str
    source: Amqp10ShovelSourceParams
    destination: Amqp10ShovelDestinationParams
    acknowledgement_mode: MessageTransferAcknowledgementMode = MessageTransferAcknowledgementMode.WHEN_CONFIRMED
    reconnect_delay: Optional[int] = None

    def to_runtime_parameter(self) -> RuntimeParameterDefinition:
        value: Dict[str, Any] = {
            "src-protocol": MessagingProtocol.AMQP10.value,
            "dest-protocol": MessagingProtocol.AMQP10.value,
            "src-uri": self.source.source_uri,
            "src-address": self.source.source_address,
            "dest-uri": self.destination.destination_uri,
            "dest-address": self.destination.destination_address,
            "ack-mode": MessageTransferAcknowledgementMode(self.acknowledgement_mode).value,
        }
        _put_optional(value, "reconnect-delay", self.reconnect_delay)
        return RuntimeParameterDefinition(self.name, self.vhost, SHOVEL_COMPONENT, value)


@dataclass(frozen=True)
class ShovelParams:
    """
    Protocol-agnostic view of a shovel runtime parameter.

    ``source_protocol``, ``destination_protocol``, ``source_uri`` and
    ``destination_uri`` are required when converting from a runtime
    parameter; every other key is optional.
    """
    name: str
    vhost: str
    source_protocol: MessagingProtocol
    destination_protocol: MessagingProtocol
    source_uri: str
    destination_uri: str
    acknowledgement_mode: MessageTransferAcknowledgementMode = MessageTransferAcknowledgementMode.WHEN_CONFIRMED
    reconnect_delay: Optional[int] = None
    source_queue: Optional[str] = None
    source_exchange: Optional[str] = None
    source_exchange_routing_key: Optional[str] = None
    source_address: Optional[str] = None
    source_predeclared: Optional[bool] = None
    destination_queue: Optional[str] = None
    destination_exchange: Optional[str] = None
    destination_exchange_routing_key: Optional[str] = None
    destination_address: Optional[str] = None
    destination_predeclared: Optional[bool] = None

    @classmethod
    def from_runtime_parameter(cls, param) -> "ShovelParams":
        values = param.value or {}
        owner = f"{param.vhost}/{param.name}"
        # presence check before the enum fallback
        required_str(values, "src-protocol")
        required_str(values, "dest-protocol")
        return cls(
            name=param.name,
            vhost=param.vhost,
            source_protocol=parse_enum_or_default(
                MessagingProtocol, values, "src-protocol", MessagingProtocol.AMQP091, owner),
            destination_protocol=parse_enum_or_default(
                MessagingProtocol, values, "dest-protocol", MessagingProtocol.AMQP091, owner),
            source_uri=required_str(values, "src-uri"),
            destination_uri=required_str(values, "dest-uri"),
            acknowledgement_mode=parse_enum_or_default(
                MessageTransferAcknowledgementMode, values, "ack-mode",
                MessageTransferAcknowledgementMode.WHEN_CONFIRMED, owner),
            reconnect_delay=optional_int(values, "reconnect-delay"),
            source_queue=optional_str(values, "src-queue"),
            source_exchange=optional_str(values, "src-exchange"),
            source_exchange_routing_key=optional_str(values, "src-exchange-key"),
            source_address=optional_str(values, "src-address"),
            source_predeclared=optional_bool(values, "src-predeclared"),
            destination_queue=optional_str(values, "dest-queue"),
            destination_exchange=optional_str(values, "dest-exchange"),
            destination_exchange_routing_key=optional_str(values, "dest-exchange-key"),
            destination_address=optional_str(values, "dest-address"),
            destination_predeclared=optional_bool(values, "dest-predeclared"),
        )

    def with_source_uri(self, uri: str) -> "ShovelParams":
        return replace(self, source_uri=uri)

    def with_destination_uri(self, uri: str) -> "ShovelParams":
        return replace(self, destination_uri=uri)

    def to_runtime_parameter(self) -> RuntimeParameterDefinition:
        value: Dict[str, Any] = {
            "src-protocol": MessagingProtocol(self.source_protocol).value,
            "dest-protocol": MessagingProtocol(self.destination_protocol).value,
            "src-uri": self.source_uri,
            "dest-uri": self.destination_uri,
            "ack-mode": MessageTransferAcknowledgementMode(self.acknowledgement_mode).value,
        }
        for key, item in (
            ("reconnect-delay", self.reconnect_delay),
            ("src-queue", self.source_queue),
            ("src-exchange", self.source_exchange),
            ("src-exchange-key", self.source_exchange_routing_key),
            ("src-address", self.source_address),
            ("src-predeclared", self.source_predeclared),
            ("dest-queue", self.destination_queue),
            ("dest-exchange", self.destination_exchange),
            ("dest-exchange-key", self.destination_exchange_routing_key),
            ("dest-address", self.destination_address),
            ("dest-predeclared", self.destination_predeclared),
        ):
            _put_optional(value, key, item)
        return RuntimeParameterDefinition(self.name, self.vhost, SHOVEL_COMPONENT, value)
