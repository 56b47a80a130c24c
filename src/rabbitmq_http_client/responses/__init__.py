"""Response models of the management API."""

from .auth import AuthenticationAttemptStatistics, OAuthConfiguration
from .base import ApiModel, PaginatedResponse, PossiblyEmpty, TagList
from .cluster import (
    ClusterIdentity,
    ClusterNode,
    NodeMemoryBreakdown,
    NodeMemoryFootprint,
    NodeMemoryTotals,
    Overview,
)
from .connections import (
    Channel,
    ChannelDetails,
    ChannelState,
    ClientCapabilities,
    ClientProperties,
    Connection,
    Consumer,
    StreamConnection,
    UserConnection,
)
from .definitions import (
    BindingDefinition,
    BindingDefinitionWithoutVirtualHost,
    BindingInfo,
    ClusterDefinitionSet,
    ClusterDefinitionSetDiff,
    ExchangeDefinition,
    ExchangeDefinitionWithoutVirtualHost,
    ExchangeInfo,
    QueueDefinition,
    QueueDefinitionWithoutVirtualHost,
    VecDiff,
    VirtualHostDefinitionSet,
    XArguments,
)
from .feature_flags import (
    DeprecatedFeature,
    DeprecationPhase,
    FeatureFlag,
    FeatureFlagStability,
    FeatureFlagState,
)
from .federation import FederationLink, FederationType, FederationUpstream
from .health_checks import (
    ClusterAlarmCheckDetails,
    GenericCheckFailureDetails,
    HealthCheckFailureDetails,
    NoActivePortListenerDetails,
    NoActiveProtocolListenerDetails41AndLater,
    NoActiveProtocolListenerDetailsPre41,
    QuorumCriticalityCheckDetails,
    QuorumEndangeredQueue,
    ResourceAlarm,
    decode_failure_details,
)
from .parameters import GlobalRuntimeParameter, RuntimeParameter, RuntimeParameterWithoutVirtualHost
from .permissions import Permissions, TopicPermission
from .policies import Policy, PolicyDefinition, PolicyWithoutVirtualHost
from .queues import (
    ConnectionDetails,
    DetailedQueueInfo,
    GetMessage,
    MessageRouted,
    NameAndVirtualHost,
    QueueInfo,
    StreamConsumer,
    StreamPublisher,
)
from .reachability import ReachabilityProbeOutcome, Reached, Unreachable
from .shovels import Shovel, ShovelState, ShovelType
from .users import CurrentUser, User, UserLimits
from .vhosts import VirtualHost, VirtualHostLimits, VirtualHostMetadata

__all__ = [
    "ApiModel", "PaginatedResponse", "PossiblyEmpty", "TagList",
    "AuthenticationAttemptStatistics", "OAuthConfiguration",
    "ClusterIdentity", "ClusterNode", "NodeMemoryBreakdown", "NodeMemoryFootprint",
    "NodeMemoryTotals", "Overview",
    "Channel", "ChannelDetails", "ChannelState", "ClientCapabilities", "ClientProperties",
    "Connection", "Consumer", "StreamConnection", "UserConnection",
    "BindingDefinition", "BindingDefinitionWithoutVirtualHost", "BindingInfo",
    "ClusterDefinitionSet", "ClusterDefinitionSetDiff", "ExchangeDefinition",
    "ExchangeDefinitionWithoutVirtualHost", "ExchangeInfo", "QueueDefinition",
    "QueueDefinitionWithoutVirtualHost", "VecDiff", "VirtualHostDefinitionSet", "XArguments",
    "DeprecatedFeature", "DeprecationPhase", "FeatureFlag", "FeatureFlagStability",
    "FeatureFlagState",
    "FederationLink", "FederationType", "FederationUpstream",
    "ClusterAlarmCheckDetails", "GenericCheckFailureDetails", "HealthCheckFailureDetails",
    "NoActivePortListenerDetails", "NoActiveProtocolListenerDetails41AndLater",
    "NoActiveProtocolListenerDetailsPre41", "QuorumCriticalityCheckDetails",
    "QuorumEndangeredQueue", "ResourceAlarm", "decode_failure_details",
    "GlobalRuntimeParameter", "RuntimeParameter", "RuntimeParameterWithoutVirtualHost",
    "Permissions", "TopicPermission",
    "Policy", "PolicyDefinition", "PolicyWithoutVirtualHost",
    "ConnectionDetails", "DetailedQueueInfo", "GetMessage", "MessageRouted",
    "NameAndVirtualHost", "QueueInfo", "StreamConsumer", "StreamPublisher",
    "ReachabilityProbeOutcome", "Reached", "Unreachable",
    "Shovel", "ShovelState", "ShovelType",
    "CurrentUser", "User", "UserLimits",
    "VirtualHost", "VirtualHostLimits", "VirtualHostMetadata",
]
