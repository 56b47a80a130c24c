"""Exchange declaration payloads."""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Union

from ..commons import ExchangeType

XArguments = Optional[Dict[str, Any]]


@dataclass
class ExchangeParams:
    """Body of ``PUT exchanges/{vhost}/{name}``; ``name`` is not serialized."""
    name: str
    exchange_type: ExchangeType
    durable: bool = True
    auto_delete: bool = False
    arguments: XArguments = None

    def __post_init__(self):
        self.exchange_type = ExchangeType(self.exchange_type)

    @classmethod
    def new_durable(cls, name: str, exchange_type: Union[ExchangeType, str],
                arguments: XArguments = None) -> "ExchangeParams":
        return cls(name, exchange_type, True, False, arguments)

    @classmethod
    def fanout(cls, name: str, durable: bool = True, auto_delete: bool = False,
               arguments: XArguments = None) -> "ExchangeParams":
        return cls(name, ExchangeType.FANOUT, durable, auto_delete, arguments)

    @classmethod
    def durable_fanout(cls, name: str, arguments: XArguments = None) -> "ExchangeParams":
        return cls.fanout(name, arguments=arguments)

    @classmethod
    def topic(cls, name: str, durable: bool = True, auto_delete: bool = False,
              arguments: XArguments = None) -> "ExchangeParams":
        return cls(name, ExchangeType.TOPIC, durable, auto_delete, arguments)

    @classmethod
    def durable_topic(cls, name: str, arguments: XArguments = None) -> "ExchangeParams":
        return cls.topic(name, arguments=arguments)

    @classmethod
    def direct(cls, name: str, durable: bool = True, auto_delete: bool = False,
               arguments: XArguments = None) -> "ExchangeParams":
        return cls(name, ExchangeType.DIRECT, durable, auto_delete, arguments)

    @classmethod
    def durable_direct(cls, name: str, arguments: XArguments = None) -> "ExchangeParams":
        return cls.direct(name, arguments=arguments)

    @classmethod
    def headers(cls, name: str, durable: bool = True, auto_delete: bool = False,
                arguments: XArguments = None) -> "ExchangeParams":
        return cls(name, ExchangeType.HEADERS, durable, auto_delete, arguments)

    @classmethod
    def durable_headers(cls, name: str, arguments: XArguments = None) -> "ExchangeParams":
        return cls.headers(name, arguments=arguments)

    @classmethod
    def local_random(cls, name: str, durable: bool = True, auto_delete: bool = False,
                     arguments: XArguments = None) -> "ExchangeParams":
        return cls(name, ExchangeType.LOCAL_RANDOM, durable, auto_delete, arguments)

    @classmethod
    def plugin(cls, name: str, exchange_type: str, durable: bool = True,
               auto_delete: bool = False, arguments: XArguments = None) -> "ExchangeParams":
        """Exchange of a type provided by a plugin, e.g. ``x-delayed-message``."""
        return cls(name, ExchangeType(exchange_type), durable, auto_delete, arguments)

    @classmethod
    def from_exchange_info(cls, info) -> "ExchangeParams":
        return cls(info.name, ExchangeType(info.exchange_type), info.durable, info.auto_delete,
                   dict(info.arguments) if info.arguments else None)

    def with_argument(self, key: str, value: Any) -> "ExchangeParams":
        return replace(self, arguments={**(self.arguments or {}), key: value})

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "type": self.exchange_type.value,
            "durable": self.durable,
            "auto_delete": self.auto_delete,
        }
        if self.arguments is not None:
            body["arguments"] = self.arguments
        return body
