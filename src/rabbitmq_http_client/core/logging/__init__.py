"""
Structured logging for the RabbitMQ HTTP API client.

Example:
    >>> from rabbitmq_http_client.core.logging import LoggingConfig, ClientLogger
    >>> config = LoggingConfig.create(level="DEBUG", format="json")
    >>> logger = ClientLogger(config)
    >>> logger.info("Request started", method="GET", url="http://localhost:15672/api/overview")
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import ClientLogger
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
    new_correlation_id,
)
from .handlers import create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "ClientLogger",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
    # Filters
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    "new_correlation_id",
    # Handlers
    "create_console_handler",
    "create_file_handler",
]
