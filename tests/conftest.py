"""
Pytest configuration and fixtures for rabbitmq-http-client tests.
"""

import pytest
import responses as responses_lib

from rabbitmq_http_client import Client, ClientConfig, RetryConfig
from rabbitmq_http_client.core.logging.config import LoggingConfig


ENDPOINT = "http://localhost:15672/api"


@pytest.fixture
def endpoint():
    """Management API endpoint used by the tests."""
    return ENDPOINT


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def client(endpoint):
    """Client without retries."""
    client = Client(ClientConfig(endpoint=endpoint, retry=RetryConfig(max_attempts=0, delay_ms=0)),
                    password="guest")
    yield client
    client.close()


@pytest.fixture
def retrying_client(endpoint):
    """Client with two extra attempts and no pause between them."""
    client = Client(ClientConfig(endpoint=endpoint, retry=RetryConfig(max_attempts=2, delay_ms=0)),
                    password="guest")
    yield client
    client.close()


@pytest.fixture
def logging_config():
    """
    LoggingConfig with console output at DEBUG.

    Example:
        def test_with_logging(logging_config):
            client = Client(ClientConfig(logging=logging_config))
    """
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=True,
        enable_file=False
    )


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig fixture with file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    log_file = tmp_path / "test.log"
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=False,
        enable_file=True,
        file_path=str(log_file)
    )
