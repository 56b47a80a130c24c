"""Request payloads: typed records that serialize to management API bodies."""

from .bindings import BindingDeletionParams, binding_body
from .exchanges import ExchangeParams
from .federation import (
    FEDERATION_UPSTREAM_COMPONENT,
    ExchangeFederationParams,
    FederationUpstreamParams,
    QueueFederationParams,
)
from .limits import EnforcedLimitParams
from .parameters import GlobalRuntimeParameterDefinition, RuntimeParameterDefinition
from .permissions import FULL_ACCESS, Permissions, TopicPermissions
from .policies import PolicyParams
from .queues import QueueParams, StreamParams
from .shovels import (
    SHOVEL_COMPONENT,
    Amqp091ShovelDestinationParams,
    Amqp091ShovelParams,
    Amqp091ShovelSourceParams,
    Amqp10ShovelDestinationParams,
    Amqp10ShovelParams,
    Amqp10ShovelSourceParams,
    ShovelParams,
)
from .users import BulkUserDelete, UserParams
from .vhosts import VirtualHostParams

__all__ = [
    "BindingDeletionParams", "binding_body",
    "ExchangeParams",
    "FEDERATION_UPSTREAM_COMPONENT", "ExchangeFederationParams", "FederationUpstreamParams",
    "QueueFederationParams",
    "EnforcedLimitParams",
    "GlobalRuntimeParameterDefinition", "RuntimeParameterDefinition",
    "FULL_ACCESS", "Permissions", "TopicPermissions",
    "PolicyParams",
    "QueueParams", "StreamParams",
    "SHOVEL_COMPONENT", "Amqp091ShovelDestinationParams", "Amqp091ShovelParams",
    "Amqp091ShovelSourceParams", "Amqp10ShovelDestinationParams", "Amqp10ShovelParams",
    "Amqp10ShovelSourceParams", "ShovelParams",
    "BulkUserDelete", "UserParams",
    "VirtualHostParams",
]
