"""
Definition sets: exported topology documents.

:class:`ClusterDefinitionSet` mirrors ``GET /api/definitions`` and
:class:`VirtualHostDefinitionSet` mirrors ``GET /api/definitions/{vhost}``,
whose objects carry no ``vhost`` field so they can be imported into a
different virtual host.

The models are mutable: transformers rewrite them in place. Lookups are
linear scans.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Generic, Hashable, Iterable, List, Optional, Tuple, TypeVar

from pydantic import Field, RootModel

from ..commons import (
    X_ARGUMENT_KEY_X_OVERFLOW,
    X_ARGUMENT_KEY_X_QUEUE_TYPE,
    BindingDestinationType,
    PolicyTarget,
    QueueType,
)
from .base import ApiModel
from .parameters import RuntimeParameter, RuntimeParameterWithoutVirtualHost
from .permissions import Permissions
from .policies import Policy, PolicyWithoutVirtualHost
from .users import User
from .vhosts import VirtualHost, VirtualHostMetadata

T = TypeVar("T")

CMQ_ARGUMENT_KEYS: Tuple[str, ...] = (
    "x-ha-mode",
    "x-ha-params",
    "x-ha-promote-on-shutdown",
    "x-ha-promote-on-failure",
    "x-ha-sync-mode",
    "x-ha-sync-batch-size",
)

QUORUM_QUEUE_INCOMPATIBLE_ARGUMENT_KEYS: Tuple[str, ...] = CMQ_ARGUMENT_KEYS + (
    "x-queue-mode",
    "x-max-priority",
)


class XArguments(RootModel[Dict[str, Any]]):
    """Optional arguments (``x-*``) of a queue, exchange or binding."""

    root: Dict[str, Any] = Field(default_factory=dict)

    CMQ_KEYS: ClassVar[Tuple[str, ...]] = CMQ_ARGUMENT_KEYS
    QUORUM_QUEUE_INCOMPATIBLE_KEYS: ClassVar[Tuple[str, ...]] = QUORUM_QUEUE_INCOMPATIBLE_ARGUMENT_KEYS
    X_EXPIRES_KEY: ClassVar[str] = "x-expires"
    X_MESSAGE_TTL_KEY: ClassVar[str] = "x-message-ttl"
    X_MAX_LENGTH_KEY: ClassVar[str] = "x-max-length"
    X_MAX_LENGTH_BYTES_KEY: ClassVar[str] = "x-max-length-bytes"

    def __len__(self) -> int:
        return len(self.root)

    def __iter__(self):
        return iter(self.root)

    def __contains__(self, key: str) -> bool:
        return key in self.root

    def __getitem__(self, key: str) -> Any:
        return self.root[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.root[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self.root.get(key, default)

    def keys(self) -> List[str]:
        return list(self.root.keys())

    def items(self):
        return self.root.items()

    def is_empty(self) -> bool:
        return not self.root

    def insert(self, key: str, value: Any) -> Optional[Any]:
        previous = self.root.get(key)
        self.root[key] = value
        return previous

    def remove(self, key: str) -> Optional[Any]:
        return self.root.pop(key, None)

    def merge(self, other: "XArguments") -> None:
        self.root.update(other.root)

    def contains_any_keys_of(self, keys: Iterable[str]) -> bool:
        return any(key in self.root for key in keys)

    def has_cmq_keys(self) -> bool:
        return self.contains_any_keys_of(CMQ_ARGUMENT_KEYS)

    def has_quorum_queue_incompatible_keys(self) -> bool:
        return self.contains_any_keys_of(QUORUM_QUEUE_INCOMPATIBLE_ARGUMENT_KEYS)

    def without_keys(self, keys: Iterable[str]) -> "XArguments":
        excluded = set(keys)
        return XArguments({k: v for k, v in self.root.items() if k not in excluded})


def _arguments_field():
    return Field(default_factory=XArguments)


class _QueueOps:
    """Shared by both queue definition shapes; the host model declares ``arguments``."""

    @property
    def queue_type(self) -> QueueType:
        """Declared ``x-queue-type``; a queue without one is classic."""
        raw = self.arguments.get(X_ARGUMENT_KEY_X_QUEUE_TYPE)
        return QueueType(raw) if isinstance(raw, str) else QueueType.CLASSIC

    @property
    def policy_target(self) -> PolicyTarget:
        return self.queue_type.policy_target

    def is_server_named(self) -> bool:
        return not self.name or self.name.startswith("amq.")

    def has_queue_ttl_arg(self) -> bool:
        return XArguments.X_EXPIRES_KEY in self.arguments

    def has_cmq_keys(self) -> bool:
        return self.arguments.has_cmq_keys()

    def has_quorum_queue_incompatible_keys(self) -> bool:
        return self.arguments.has_quorum_queue_incompatible_keys()

    def without_keys(self, keys: Iterable[str]):
        return self.model_copy(update={"arguments": self.arguments.without_keys(keys)})

    def without_cmq_keys(self):
        return self.without_keys(CMQ_ARGUMENT_KEYS)

    def without_quorum_queue_incompatible_keys(self):
        return self.without_keys(QUORUM_QUEUE_INCOMPATIBLE_ARGUMENT_KEYS)

    def update_queue_type(self, queue_type: QueueType):
        self.arguments[X_ARGUMENT_KEY_X_QUEUE_TYPE] = QueueType(queue_type).value
        return self

    def compare_and_swap_string_argument(self, key: str, value: str, new_value: str):
        if self.arguments.get(key) == value:
            self.arguments[key] = new_value
        return self

    def compare_and_swap_overflow_argument(self, value: str, new_value: str):
        return self.compare_and_swap_string_argument(X_ARGUMENT_KEY_X_OVERFLOW, value, new_value)


class QueueDefinition(_QueueOps, ApiModel):
    name: str
    vhost: str
    durable: bool = True
    auto_delete: bool = False
    arguments: XArguments = _arguments_field()

    def does_match(self, policy: Policy) -> bool:
        return policy.does_match_object(self)


class QueueDefinitionWithoutVirtualHost(_QueueOps, ApiModel):
    name: str
    durable: bool = True
    auto_delete: bool = False
    arguments: XArguments = _arguments_field()


class ExchangeDefinition(ApiModel):
    name: str
    vhost: str
    exchange_type: str = Field(alias="type")
    durable: bool = True
    auto_delete: bool = False
    internal: bool = False
    arguments: XArguments = _arguments_field()

    policy_target: ClassVar[PolicyTarget] = PolicyTarget.EXCHANGES

    def does_match(self, policy: Policy) -> bool:
        return policy.does_match_object(self)


class ExchangeDefinitionWithoutVirtualHost(ApiModel):
    name: str
    exchange_type: str = Field(alias="type")
    durable: bool = True
    auto_delete: bool = False
    internal: bool = False
    arguments: XArguments = _arguments_field()


class BindingDefinition(ApiModel):
    vhost: str
    source: str
    destination: str
    destination_type: BindingDestinationType
    routing_key: str = ""
    arguments: XArguments = _arguments_field()
    properties_key: Optional[str] = None


class BindingDefinitionWithoutVirtualHost(ApiModel):
    source: str
    destination: str
    destination_type: BindingDestinationType
    routing_key: str = ""
    arguments: XArguments = _arguments_field()
    properties_key: Optional[str] = None


# The list endpoints return the same shapes
ExchangeInfo = ExchangeDefinition
BindingInfo = BindingDefinition


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Diffs
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass
class VecDiff(Generic[T]):
    """Items only on the left, only on the right, and (left, right) pairs that differ."""
    only_in_left: List[T] = field(default_factory=list)
    only_in_right: List[T] = field(default_factory=list)
    modified: List[Tuple[T, T]] = field(default_factory=list)

    @classmethod
    def of(cls, left: Iterable[T], right: Iterable[T], key: Callable[[T], Hashable]) -> "VecDiff[T]":
        left_by_id = {key(item): item for item in left}
        right_by_id = {key(item): item for item in right}
        diff: VecDiff[T] = cls()
        for item_id, left_item in left_by_id.items():
            right_item = right_by_id.get(item_id)
            if right_item is None:
                diff.only_in_left.append(left_item)
            elif left_item != right_item:
                diff.modified.append((left_item, right_item))
        diff.only_in_right = [item for item_id, item in right_by_id.items() if item_id not in left_by_id]
        return diff

    def is_empty(self) -> bool:
        return not (self.only_in_left or self.only_in_right or self.modified)

    def has_changes(self) -> bool:
        return not self.is_empty()


def _by_name(item) -> Hashable:
    return item.name


def _by_vhost_and_name(item) -> Hashable:
    return (item.vhost, item.name)


def _permissions_id(item: Permissions) -> Hashable:
    return (item.user, item.vhost)


def _parameter_id(item: RuntimeParameter) -> Hashable:
    return (item.vhost, item.component, item.name)


def _binding_id(item: BindingDefinition) -> Hashable:
    return (item.vhost, item.source, item.destination, item.routing_key, item.properties_key)


@dataclass
class ClusterDefinitionSetDiff:
    users: VecDiff[User]
    virtual_hosts: VecDiff[VirtualHost]
    permissions: VecDiff[Permissions]
    parameters: VecDiff[RuntimeParameter]
    policies: VecDiff[Policy]
    queues: VecDiff[QueueDefinition]
    exchanges: VecDiff[ExchangeDefinition]
    bindings: VecDiff[BindingDefinition]

    def _categories(self):
        return (self.users, self.virtual_hosts, self.permissions, self.parameters,
                self.policies, self.queues, self.exchanges, self.bindings)

    def is_empty(self) -> bool:
        return all(category.is_empty() for category in self._categories())

    def has_changes(self) -> bool:
        return not self.is_empty()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Definition sets
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _dump(model: ApiModel) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


class ClusterDefinitionSet(ApiModel):
    server_version: Optional[str] = Field(default=None, alias="rabbitmq_version")
    users: List[User]
    virtual_hosts: List[VirtualHost] = Field(alias="vhosts")
    permissions: List[Permissions]
    parameters: List[RuntimeParameter]
    policies: List[Policy]
    queues: List[QueueDefinition]
    exchanges: List[ExchangeDefinition]
    bindings: List[BindingDefinition]

    # Lookups

    def find_policy(self, vhost: str, name: str) -> Optional[Policy]:
        return next((p for p in self.policies if p.vhost == vhost and p.name == name), None)

    def find_queue(self, vhost: str, name: str) -> Optional[QueueDefinition]:
        return next((q for q in self.queues if q.vhost == vhost and q.name == name), None)

    def find_exchange(self, vhost: str, name: str) -> Optional[ExchangeDefinition]:
        return next((x for x in self.exchanges if x.vhost == vhost and x.name == name), None)

    def policies_in(self, vhost: str) -> List[Policy]:
        return [p for p in self.policies if p.vhost == vhost]

    def queues_in(self, vhost: str) -> List[QueueDefinition]:
        return [q for q in self.queues if q.vhost == vhost]

    def exchanges_in(self, vhost: str) -> List[ExchangeDefinition]:
        return [x for x in self.exchanges if x.vhost == vhost]

    def queues_matching(self, policy: Policy) -> List[QueueDefinition]:
        return [q for q in self.queues if policy.does_match_object(q)]

    # Mutations

    def update_policies(self, f: Callable[[Policy], Policy]) -> List[Policy]:
        self.policies = [f(p) for p in self.policies]
        return list(self.policies)

    def update_queues(self, f: Callable[[QueueDefinition], QueueDefinition]) -> List[QueueDefinition]:
        self.queues = [f(q) for q in self.queues]
        return list(self.queues)

    def update_queue(self, vhost: str, name: str,
                     f: Callable[[QueueDefinition], QueueDefinition]) -> Optional[QueueDefinition]:
        for index, queue in enumerate(self.queues):
            if queue.vhost == vhost and queue.name == name:
                updated = f(queue)
                self.queues[index] = updated
                return updated
        return None

    def update_queue_type(self, vhost: str, name: str, queue_type: QueueType) -> Optional[QueueDefinition]:
        queue = self.find_queue(vhost, name)
        if queue is None:
            return None
        return queue.update_queue_type(queue_type)

    def update_queue_type_of_matching(self, policy: Policy, queue_type: QueueType) -> None:
        for queue in self.queues_matching(policy):
            queue.update_queue_type(queue_type)

    # Comparison and export

    def diff(self, other: "ClusterDefinitionSet") -> ClusterDefinitionSetDiff:
        return ClusterDefinitionSetDiff(
            users=VecDiff.of(self.users, other.users, _by_name),
            virtual_hosts=VecDiff.of(self.virtual_hosts, other.virtual_hosts, _by_name),
            permissions=VecDiff.of(self.permissions, other.permissions, _permissions_id),
            parameters=VecDiff.of(self.parameters, other.parameters, _parameter_id),
            policies=VecDiff.of(self.policies, other.policies, _by_vhost_and_name),
            queues=VecDiff.of(self.queues, other.queues, _by_vhost_and_name),
            exchanges=VecDiff.of(self.exchanges, other.exchanges, _by_vhost_and_name),
            bindings=VecDiff.of(self.bindings, other.bindings, _binding_id),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Document in the broker's import format."""
        return _dump(self)


class VirtualHostDefinitionSet(ApiModel):
    server_version: Optional[str] = Field(default=None, alias="rabbitmq_version")
    metadata: Optional[VirtualHostMetadata] = None
    parameters: List[RuntimeParameterWithoutVirtualHost] = []
    policies: List[PolicyWithoutVirtualHost] = []
    queues: List[QueueDefinitionWithoutVirtualHost] = []
    exchanges: List[ExchangeDefinitionWithoutVirtualHost] = []
    bindings: List[BindingDefinitionWithoutVirtualHost] = []

    def find_policy(self, name: str) -> Optional[PolicyWithoutVirtualHost]:
        return next((p for p in self.policies if p.name == name), None)

    def find_queue(self, name: str) -> Optional[QueueDefinitionWithoutVirtualHost]:
        return next((q for q in self.queues if q.name == name), None)

    def find_exchange(self, name: str) -> Optional[ExchangeDefinitionWithoutVirtualHost]:
        return next((x for x in self.exchanges if x.name == name), None)

    def queues_matching(self, policy: PolicyWithoutVirtualHost) -> List[QueueDefinitionWithoutVirtualHost]:
        return [q for q in self.queues if policy.does_match(q.name, q.policy_target)]

    def update_policies(self, f: Callable[[PolicyWithoutVirtualHost], PolicyWithoutVirtualHost]):
        self.policies = [f(p) for p in self.policies]
        return list(self.policies)

    def update_queue_type_of_matching(self, policy: PolicyWithoutVirtualHost, queue_type: QueueType) -> None:
        for queue in self.queues_matching(policy):
            queue.update_queue_type(queue_type)

    def to_dict(self) -> Dict[str, Any]:
        return _dump(self)
