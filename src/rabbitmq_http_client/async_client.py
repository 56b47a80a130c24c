# src/rabbitmq_http_client/async_client.py
"""
Асинхронный клиент RabbitMQ HTTP API на базе httpx.

Те же операции, что и у Client, но каждая возвращает корутину:

    >>> async with AsyncClient(config, password="s3kRe7") as client:
    ...     nodes = await client.list_nodes()
"""

import time
import warnings
from datetime import timedelta
from typing import Any, Iterable, Mapping, Optional, Union

try:
    import httpx
except ImportError:
    raise ImportError(
        "httpx is required for AsyncClient. "
        "Install with: pip install rabbitmq-http-client"
    )

from .api.base import Decoder, model_list
from .api.bindings import candidate_bindings_path
from .core.client import HEALTH_CHECK_FAILURE_STATUS, ClientCore
from .core.config import DEFAULT_PASSWORD, ClientConfig, RetryConfig, TimeoutConfig
from .core.error_handler import ErrorHandler
from .core.exceptions import (
    ConnectionError,
    RabbitMQHTTPClientException,
    TimeoutError,
    TransportError,
)
from .core.retry_engine import RetryEngine
from .core.secrets import Secret
from .params.bindings import BindingDeletionParams
from .params.policies import PolicyParams
from .responses.definitions import BindingInfo
from .responses.reachability import Reached, ReachabilityProbeOutcome, Unreachable


def classify_httpx_exception(exc: Exception, url: str) -> RabbitMQHTTPClientException:
    """
    Конвертировать httpx исключения в наши.

    Examples:
        >>> our_exc = classify_httpx_exception(httpx.ConnectTimeout("timed out"), url)
        >>> assert isinstance(our_exc, TimeoutError)
    """
    if isinstance(exc, httpx.TimeoutException):
        return TimeoutError("Request timeout", url, cause=exc)
    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.ReadError)):
        return ConnectionError("Connection error", url, cause=exc)
    if isinstance(exc, httpx.HTTPError):
        return TransportError(f"Request failed: {exc}", url, cause=exc)
    return RabbitMQHTTPClientException(str(exc))


class AsyncClient(ClientCore):
    """
    Асинхронный клиент с повторами и таймаутами.

    Точки приостановки: отправка запроса и пауза перед повтором; отмена
    задачи прерывает обе.

    Example:
        >>> client = AsyncClient(ClientConfig(username="admin"), password="s3kRe7")
        >>> await client.declare_queue("/", QueueParams.new_stream("events"))
        >>> await client.close()
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        password: Union[str, Secret] = DEFAULT_PASSWORD,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            config: ClientConfig
            password: Пароль для Basic auth
            client: httpx.AsyncClient вызывающей стороны. Его таймаут и TLS
                    настройки используются как есть, закрывать его не нужно.
        """
        super().__init__(config, password)

        object.__setattr__(self, '_owns_client', client is None)
        object.__setattr__(self, '_client', client if client is not None else self._create_client())
        object.__setattr__(self, '_closed', False)
        object.__setattr__(self, '_initialized', True)

    @classmethod
    def from_env(cls, profile: Optional[str] = None, env_file: Optional[str] = None,
                 **overrides: Any) -> 'AsyncClient':
        from .core.env_config import load_credentials_from_env, load_from_env
        config = load_from_env(profile=profile, env_file=env_file, **overrides)
        _, password = load_credentials_from_env(profile=profile, env_file=env_file)
        return cls(config, password)

    def _create_client(self) -> httpx.AsyncClient:
        """Создать httpx клиент по конфигу."""
        security = self._config.security
        client_kwargs = {
            "timeout": httpx.Timeout(**self._config.timeout.as_httpx()),
            "verify": security.verify,
            "headers": dict(self._config.headers),
            "limits": httpx.Limits(
                max_connections=self._config.pool.pool_maxsize,
                max_keepalive_connections=self._config.pool.pool_connections,
            ),
        }
        if security.cert:
            client_kwargs["cert"] = security.cert
        return httpx.AsyncClient(**client_kwargs)

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._client

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Закрыть логгер, собственный httpx клиент и затереть пароль."""
        self._close_credentials()
        if self._owns_client and not self._closed:
            await self._client.aclose()
        object.__setattr__(self, '_closed', True)

    def __del__(self):
        try:
            if getattr(self, "_owns_client", False) and not self._closed and not self._client.is_closed:
                warnings.warn(
                    "AsyncClient garbage collected without close(). "
                    "Use 'async with AsyncClient(...) as client:' or await client.close().",
                    ResourceWarning,
                    stacklevel=2
                )
                self._password.close()
        except Exception:
            # interpreter shutdown
            pass

    # ==================== Транспорт ====================

    async def _send(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        accept_client_error: Optional[int] = None,
        accept_server_error: Optional[int] = None,
    ) -> httpx.Response:
        """Выполнить запрос с повторами (см. Client._send)."""
        url = self._url(path)
        correlation_id = self._start_request(method, url)
        request_headers = self._request_headers(headers, correlation_id)
        retry = RetryEngine(self._config.retry)
        started = time.monotonic()

        try:
            while True:
                try:
                    response = await self._client.request(
                        method,
                        url,
                        json=body,
                        params=query,
                        headers=request_headers,
                        auth=httpx.BasicAuth(self._config.username, self._password.reveal()),
                    )
                    ErrorHandler.check_response(
                        response.status_code, url, response.headers, response.text,
                        accept_client_error, accept_server_error,
                    )
                except httpx.HTTPError as exc:
                    error = classify_httpx_exception(exc, url)
                except RabbitMQHTTPClientException as exc:
                    error = exc
                else:
                    self._log_completed(method, url, response.status_code, started, retry.attempt + 1)
                    return response

                if not retry.should_retry(error):
                    self._log_failed(method, url, error, started, retry.attempt + 1)
                    raise error

                self._log_retry(method, url, error, retry.attempt + 1)
                await retry.async_wait()
                retry.increment()
        finally:
            self._finish_request()

    async def _get(self, path: str, decode: Optional[Decoder] = None, *,
                   query: Optional[Mapping[str, Any]] = None, raw: bool = False):
        response = await self._send("GET", path, query=query)
        return self._decode(str(response.url), decode, response.text, raw)

    async def _put(self, path: str, body: Any = None):
        await self._send("PUT", path, body=body)

    async def _post(self, path: str, body: Any = None, decode: Optional[Decoder] = None):
        response = await self._send("POST", path, body=body)
        return self._decode(str(response.url), decode, response.text)

    async def _delete(self, path: str, idempotently: bool = False,
                      headers: Optional[Mapping[str, str]] = None):
        await self._send("DELETE", path, headers=headers,
                         accept_client_error=404 if idempotently else None)

    async def _health_check(self, path: str):
        response = await self._send("GET", path, accept_server_error=HEALTH_CHECK_FAILURE_STATUS)
        if response.status_code == HEALTH_CHECK_FAILURE_STATUS:
            raise self._health_check_failure(path, response.status_code, response.text)

    # ==================== Операции из нескольких запросов ====================

    async def delete_binding(self, params: BindingDeletionParams, idempotently: bool = False) -> None:
        """См. Client.delete_binding."""
        bindings = await self._get(candidate_bindings_path(params), model_list(BindingInfo))
        path = self._select_binding(params, bindings, idempotently)
        if path is not None:
            await self._delete(path, idempotently)

    async def delete_exchanges(self, vhost: str, names: Iterable[str], idempotently: bool = False) -> None:
        for name in names:
            await self.delete_exchange(vhost, name, idempotently)

    async def enable_all_stable_feature_flags(self) -> None:
        for name in self._flags_to_enable(await self.list_feature_flags()):
            await self.enable_feature_flag(name)

    async def clear_all_runtime_parameters(self) -> None:
        for param in await self.list_runtime_parameters():
            await self.clear_runtime_parameter(param.component, param.vhost, param.name)

    async def clear_all_runtime_parameters_of_component(self, component: str) -> None:
        for param in await self.list_runtime_parameters_of_component(component):
            await self.clear_runtime_parameter(param.component, param.vhost, param.name)

    async def declare_policies(self, params: Iterable[PolicyParams]) -> None:
        for p in params:
            await self.declare_policy(p)

    async def delete_policies_in(self, vhost: str, names: Iterable[str]) -> None:
        for name in names:
            await self.delete_policy(vhost, name, idempotently=True)

    async def declare_operator_policies(self, params: Iterable[PolicyParams]) -> None:
        for p in params:
            await self.declare_operator_policy(p)

    async def delete_operator_policies_in(self, vhost: str, names: Iterable[str]) -> None:
        for name in names:
            await self.delete_operator_policy(vhost, name, idempotently=True)

    async def probe_reachability(self) -> ReachabilityProbeOutcome:
        started = time.monotonic()
        try:
            current_user = await self.current_user()
        except RabbitMQHTTPClientException as error:
            return Unreachable(error)
        return Reached(current_user, timedelta(seconds=time.monotonic() - started))


class AsyncClientBuilder:
    """
    Пошаговая сборка AsyncClient (те же методы, что у ClientBuilder).

    Example:
        >>> client = AsyncClientBuilder().with_endpoint("http://rabbit:15672/api").build()
    """

    def __init__(self):
        self._config = ClientConfig()
        self._password: Union[str, Secret] = DEFAULT_PASSWORD
        self._client: Optional[httpx.AsyncClient] = None

    def with_endpoint(self, endpoint: str) -> 'AsyncClientBuilder':
        self._config = self._config.with_endpoint(endpoint)
        return self

    def with_basic_auth_credentials(self, username: str, password: Union[str, Secret]) -> 'AsyncClientBuilder':
        self._config = self._config.with_username(username)
        self._password = password
        return self

    def with_request_timeout(self, timeout: Union[float, TimeoutConfig]) -> 'AsyncClientBuilder':
        """Ignored when an httpx client is supplied via with_client."""
        self._config = self._config.with_timeout(timeout)
        return self

    def with_retry_settings(self, retry: RetryConfig) -> 'AsyncClientBuilder':
        self._config = self._config.with_retry(retry)
        return self

    def with_client(self, client: httpx.AsyncClient) -> 'AsyncClientBuilder':
        self._client = client
        return self

    def with_config(self, config: ClientConfig) -> 'AsyncClientBuilder':
        self._config = config
        return self

    def build(self) -> AsyncClient:
        return AsyncClient(self._config, self._password, client=self._client)
