"""Core модули клиента: конфиг, исключения, повторы, транспорт."""

from .config import (
    TimeoutConfig,
    RetryConfig,
    ConnectionPoolConfig,
    SecurityConfig,
    ClientConfig,
)
from .exceptions import (
    RabbitMQHTTPClientException,
    TransportError,
    TimeoutError,
    ConnectionError,
    ResponseError,
    ClientErrorResponse,
    ServerErrorResponse,
    NotFound,
    ErrorDetails,
    HealthCheckFailed,
    MultipleMatchingBindings,
    InvalidHeaderValue,
    ConversionError,
    ResponseDecodingError,
    ConfigurationError,
    classify_requests_exception,
)
from .retry_engine import RetryEngine
from .error_handler import ErrorHandler
from .secrets import Secret
from .client import Client, ClientBuilder

__all__ = [
    # Config
    "TimeoutConfig",
    "RetryConfig",
    "ConnectionPoolConfig",
    "SecurityConfig",
    "ClientConfig",
    # Retry
    "RetryEngine",
    # Core
    "Client",
    "ClientBuilder",
    "ErrorHandler",
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
    "ErrorDetails",
    "HealthCheckFailed",
    "MultipleMatchingBindings",
    "InvalidHeaderValue",
    "ConversionError",
    "ResponseDecodingError",
    "ConfigurationError",
    "classify_requests_exception",
]
