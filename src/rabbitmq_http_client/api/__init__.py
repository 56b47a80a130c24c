"""Operation mixins shared by the blocking and async clients."""

from .auth import AuthApi
from .base import ApiBase
from .bindings import BindingsApi
from .cluster import ClusterApi
from .connections import ConnectionsApi
from .definitions import DefinitionsApi
from .exchanges import ExchangesApi
from .feature_flags import FeatureFlagsApi
from .federation import FederationApi
from .health_checks import HealthChecksApi
from .limits import LimitsApi
from .parameters import ParametersApi
from .permissions import PermissionsApi
from .policies import PoliciesApi
from .queues import QueuesApi
from .shovels import ShovelsApi
from .users import UsersApi
from .vhosts import VirtualHostsApi


class ApiMixins(
    ClusterApi,
    VirtualHostsApi,
    UsersApi,
    PermissionsApi,
    ConnectionsApi,
    QueuesApi,
    ExchangesApi,
    BindingsApi,
    ParametersApi,
    PoliciesApi,
    LimitsApi,
    DefinitionsApi,
    HealthChecksApi,
    FeatureFlagsApi,
    FederationApi,
    ShovelsApi,
    AuthApi,
):
    """Every single-request operation of the management API."""


__all__ = [
    "ApiBase",
    "ApiMixins",
    "AuthApi",
    "BindingsApi",
    "ClusterApi",
    "ConnectionsApi",
    "DefinitionsApi",
    "ExchangesApi",
    "FeatureFlagsApi",
    "FederationApi",
    "HealthChecksApi",
    "LimitsApi",
    "ParametersApi",
    "PermissionsApi",
    "PoliciesApi",
    "QueuesApi",
    "ShovelsApi",
    "UsersApi",
    "VirtualHostsApi",
]
