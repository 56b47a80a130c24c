"""RabbitMQ HTTP API client: blocking (requests) and async (httpx) variants."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.config import (
    ClientConfig,
    TimeoutConfig,
    RetryConfig,
    ConnectionPoolConfig,
    SecurityConfig,
)
from .core.exceptions import (
    RabbitMQHTTPClientException,
    TransportError,
    TimeoutError,
    ConnectionError,
    ResponseError,
    ClientErrorResponse,
    ServerErrorResponse,
    NotFound,
    HealthCheckFailed,
    MultipleMatchingBindings,
    InvalidHeaderValue,
    ConversionError,
    ResponseDecodingError,
    ConfigurationError,
)
from .core.client import Client, ClientBuilder
from .core.secrets import Secret
from .core.logging import LoggingConfig, ClientLogger

# Опциональный импорт AsyncClient (требует httpx)
try:
    from .async_client import AsyncClient, AsyncClientBuilder
    _HAS_ASYNC = True
except ImportError:
    _HAS_ASYNC = False
    AsyncClient = None  # type: ignore
    AsyncClientBuilder = None  # type: ignore

from .commons import (
    BindingDestinationType,
    ExchangeType,
    MessageAckMode,
    MessageTransferAcknowledgementMode,
    MessagingProtocol,
    PolicyTarget,
    QueueType,
    SupportedProtocol,
    TlsPeerVerificationMode,
    UserLimitTarget,
    VirtualHostLimitTarget,
)
from .pagination import PaginationParams
from .password_hashing import HashingAlgorithm, hash_password
from .paths import path
from .transformers import TransformationChain, transformer_names
from .uris import TlsClientSettings, UriBuilder

# NullHandler: без настроенного логирования библиотека молчит
logging.getLogger('rabbitmq_http_client').addHandler(logging.NullHandler())

try:
    __version__ = version("rabbitmq-http-client")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Clients
    "Client",
    "ClientBuilder",
    "AsyncClient",
    "AsyncClientBuilder",

    # Config
    "ClientConfig",
    "TimeoutConfig",
    "RetryConfig",
    "ConnectionPoolConfig",
    "SecurityConfig",
    "LoggingConfig",
    "ClientLogger",
    "Secret",

    # Exceptions
    "RabbitMQHTTPClientException",
    "TransportError",
    "TimeoutError",
    "ConnectionError",
    "ResponseError",
    "ClientErrorResponse",
    "ServerErrorResponse",
    "NotFound",
    "HealthCheckFailed",
    "MultipleMatchingBindings",
    "InvalidHeaderValue",
    "ConversionError",
    "ResponseDecodingError",
    "ConfigurationError",

    # Enums
    "BindingDestinationType",
    "ExchangeType",
    "MessageAckMode",
    "MessageTransferAcknowledgementMode",
    "MessagingProtocol",
    "PolicyTarget",
    "QueueType",
    "SupportedProtocol",
    "TlsPeerVerificationMode",
    "UserLimitTarget",
    "VirtualHostLimitTarget",

    # Helpers
    "PaginationParams",
    "HashingAlgorithm",
    "hash_password",
    "path",
    "TransformationChain",
    "transformer_names",
    "TlsClientSettings",
    "UriBuilder",

    # Version
    "__version__",
]
