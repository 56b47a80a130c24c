"""Тесты конфигурации клиента."""

import pytest

from rabbitmq_http_client.core.config import (
    DEFAULT_ENDPOINT,
    ClientConfig,
    ConnectionPoolConfig,
    RetryConfig,
    SecurityConfig,
    TimeoutConfig,
)


class TestTimeoutConfig:

    def test_defaults(self):
        config = TimeoutConfig()
        assert config.as_tuple() == (5, 30)

    def test_of(self):
        assert TimeoutConfig.of(10) == TimeoutConfig(10, 10)
        assert TimeoutConfig.of((2, 20)) == TimeoutConfig(2, 20)

    def test_httpx_arguments(self):
        assert TimeoutConfig(2, 20).as_httpx() == {"connect": 2, "read": 20, "write": 20, "pool": 2}

    @pytest.mark.parametrize("kwargs", [{"connect": 0}, {"read": -1}])
    def test_validation(self, kwargs):
        with pytest.raises(ValueError):
            TimeoutConfig(**kwargs)


class TestRetryConfig:

    def test_no_retries_by_default(self):
        config = RetryConfig()
        assert config.max_attempts == 0
        assert config.total_attempts == 1

    def test_delay_seconds(self):
        assert RetryConfig(max_attempts=2, delay_ms=250).delay_seconds == 0.25

    def test_negative_values(self):
        with pytest.raises(ValueError):
            RetryConfig(max_attempts=-1)
        with pytest.raises(ValueError):
            RetryConfig(delay_ms=-5)


class TestSecurityConfig:

    def test_verify(self):
        assert SecurityConfig().verify is True
        assert SecurityConfig(ca_bundle="/etc/ca.pem").verify == "/etc/ca.pem"
        assert SecurityConfig(verify_ssl=False, ca_bundle="/etc/ca.pem").verify is False

    def test_cert(self):
        assert SecurityConfig().cert is None
        assert SecurityConfig(client_cert="/c.pem").cert == "/c.pem"
        assert SecurityConfig(client_cert="/c.pem", client_key="/k.pem").cert == ("/c.pem", "/k.pem")

    def test_key_requires_cert(self):
        with pytest.raises(ValueError):
            SecurityConfig(client_key="/k.pem")


def test_pool_validation():
    with pytest.raises(ValueError):
        ConnectionPoolConfig(pool_maxsize=0)


class TestClientConfig:

    def test_defaults(self):
        config = ClientConfig()
        assert config.endpoint == DEFAULT_ENDPOINT
        assert config.username == "guest"
        assert config.logging is None

    def test_trailing_slash_is_stripped(self):
        assert ClientConfig(endpoint="http://rabbit:15672/api/").endpoint == "http://rabbit:15672/api"

    def test_endpoint_must_be_http(self):
        with pytest.raises(ValueError):
            ClientConfig(endpoint="amqp://rabbit:5672")

    def test_frozen(self):
        config = ClientConfig()
        with pytest.raises(Exception):
            config.username = "admin"

    def test_headers_are_read_only(self):
        config = ClientConfig(headers={"X-Team": "platform"})
        with pytest.raises(TypeError):
            config.headers["X-Team"] = "other"

    def test_create(self):
        config = ClientConfig.create(endpoint="https://rabbit:15671/api", username="admin",
                                     timeout=(3, 15), max_retries=2, retry_delay_ms=100, verify_ssl=False)
        assert config.timeout == TimeoutConfig(3, 15)
        assert config.retry == RetryConfig(2, 100)
        assert config.security.verify is False

    def test_with_methods_return_new_instances(self):
        config = ClientConfig()
        changed = (config.with_endpoint("http://other:15672/api")
                   .with_username("admin")
                   .with_timeout(60)
                   .with_retry(RetryConfig(1, 10))
                   .with_headers({"X-Team": "platform"}))

        assert config.endpoint == DEFAULT_ENDPOINT
        assert changed.endpoint == "http://other:15672/api"
        assert changed.username == "admin"
        assert changed.timeout.read == 60
        assert changed.retry.max_attempts == 1
        assert dict(changed.headers) == {"X-Team": "platform"}
