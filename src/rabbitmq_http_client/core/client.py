# src/rabbitmq_http_client/core/client.py
import json
import logging
import time
import warnings
from datetime import timedelta
from typing import Any, Iterable, List, Mapping, Optional, TYPE_CHECKING, Union
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter
from requests.auth import HTTPBasicAuth

from ..api import ApiMixins
from ..api.base import Decoder, model_list
from ..api.bindings import binding_path, candidate_bindings_path
from ..params.bindings import BindingDeletionParams
from ..params.policies import PolicyParams
from ..paths import join_endpoint
from ..responses.definitions import BindingInfo
from ..responses.feature_flags import FeatureFlagStability, FeatureFlagState
from ..responses.health_checks import decode_failure_details
from ..responses.reachability import Reached, ReachabilityProbeOutcome, Unreachable
from ..utils.sanitizer import sanitize_url
from .config import DEFAULT_PASSWORD, ClientConfig, RetryConfig, TimeoutConfig
from .error_handler import ErrorHandler
from .exceptions import (
    HealthCheckFailed,
    MultipleMatchingBindings,
    NotFound,
    RabbitMQHTTPClientException,
    ResponseDecodingError,
    classify_requests_exception,
)
from .logging.filters import clear_correlation_id, new_correlation_id
from .retry_engine import RetryEngine
from .secrets import Secret
from .session_manager import ThreadSafeSessionManager

if TYPE_CHECKING:
    from .logging import ClientLogger

logger = logging.getLogger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"
HEALTH_CHECK_FAILURE_STATUS = 503


class ClientCore(ApiMixins):
    """
    Общая часть Client и AsyncClient: конфиг, секрет, логирование,
    декодирование ответов и выбор удаляемого binding.

    Транспорт (requests или httpx) и цикл повторов реализуют подклассы.
    """

    def __init__(self, config: Optional[ClientConfig] = None,
                 password: Union[str, Secret] = DEFAULT_PASSWORD):
        config = config or ClientConfig()
        # собственная копия: close() другого клиента не затирает наш буфер
        secret = password.copy() if isinstance(password, Secret) else Secret(password)

        object.__setattr__(self, '_config', config)
        object.__setattr__(self, '_password', secret)
        object.__setattr__(self, '_logger', self._create_logger(config, id(self)))

    def __setattr__(self, name, value):
        """Запретить изменение после init (immutability)."""
        if hasattr(self, '_initialized'):
            raise RuntimeError(
                f"Cannot modify '{name}' - {type(self).__name__} is immutable. "
                f"Create new instance instead."
            )
        object.__setattr__(self, name, value)

    @staticmethod
    def _create_logger(config: ClientConfig, instance_id: int) -> Optional['ClientLogger']:
        if config.logging is None:
            return None
        from .logging import ClientLogger
        # ClientLogger владеет handlers своего logging.Logger: имя уникально для клиента
        host = urlparse(config.endpoint).netloc or "unknown"
        return ClientLogger(config=config.logging, name=f"rabbitmq_http_client.{host}.{instance_id:x}")

    # ==================== Свойства ====================

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    @property
    def username(self) -> str:
        return self._config.username

    @property
    def retry_settings(self) -> RetryConfig:
        return self._config.retry

    # ==================== Внутренние методы ====================

    def _url(self, path: str) -> str:
        return join_endpoint(self._config.endpoint, path)

    def _log(self, level: int, message: str, **fields: Any) -> None:
        """Structured logger when configured, the module logger otherwise."""
        if self._logger is not None:
            self._logger.log(level, message, **fields)
        else:
            logger.log(level, message, extra=fields)

    def _start_request(self, method: str, url: str) -> str:
        correlation_id = new_correlation_id()
        self._log(logging.DEBUG, "Request started", method=method, url=sanitize_url(url),
                  correlation_id=correlation_id)
        return correlation_id

    def _log_completed(self, method: str, url: str, status_code: int, started: float,
                       attempt: int) -> None:
        self._log(
            logging.DEBUG,
            "Request completed",
            method=method,
            url=sanitize_url(url),
            status_code=status_code,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
            attempt=attempt,
        )

    def _log_retry(self, method: str, url: str, error: Exception, attempt: int) -> None:
        self._log(
            logging.WARNING,
            "Request failed (will retry)",
            method=method,
            url=sanitize_url(url),
            error=str(error),
            error_type=type(error).__name__,
            attempt=attempt,
            max_attempts=self._config.retry.total_attempts,
            delay_ms=self._config.retry.delay_ms,
        )

    def _log_failed(self, method: str, url: str, error: Exception, started: float,
                    attempt: int) -> None:
        self._log(
            logging.ERROR,
            "Request failed",
            method=method,
            url=sanitize_url(url),
            error=str(error),
            error_type=type(error).__name__,
            attempt=attempt,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
        )

    @staticmethod
    def _finish_request() -> None:
        clear_correlation_id()

    def _request_headers(self, headers: Optional[Mapping[str, str]], correlation_id: str) -> dict:
        merged = dict(headers or {})
        merged[CORRELATION_ID_HEADER] = correlation_id
        return merged

    @staticmethod
    def _decode(url: str, decode: Optional[Decoder], text: str, raw: bool = False) -> Any:
        """
        Разобрать тело ответа.

        Ошибки JSON и валидации моделей (ValueError) становятся
        ResponseDecodingError; прочие исключения декодера (NotFound,
        ConversionError) пробрасываются как есть.
        """
        if raw:
            return text
        if decode is None:
            return None
        try:
            data = json.loads(text) if text else None
            return decode(data)
        except ValueError as exc:
            raise ResponseDecodingError(url, str(exc)) from exc

    @staticmethod
    def _health_check_failure(path: str, status_code: int, text: str) -> HealthCheckFailed:
        try:
            body = json.loads(text) if text else None
        except ValueError:
            body = text
        return HealthCheckFailed(path, status_code, decode_failure_details(body))

    @staticmethod
    def _select_binding(params: BindingDeletionParams, bindings: List[BindingInfo],
                        idempotently: bool) -> Optional[str]:
        """
        Путь удаления единственного подходящего binding.

        Returns:
            Путь DELETE запроса или None, если удалять нечего (idempotently=True)

        Raises:
            NotFound: ни один binding не подошёл
            MultipleMatchingBindings: подошло больше одного
        """
        matched = [b for b in bindings if params.matches(b)]
        if not matched:
            if idempotently:
                return None
            raise NotFound()
        if len(matched) > 1:
            raise MultipleMatchingBindings(len(matched))
        return binding_path(params.virtual_host, params.source, params.destination_type,
                            params.destination, matched[0].properties_key)

    @staticmethod
    def _flags_to_enable(flags) -> List[str]:
        return [
            f.name for f in flags
            if f.state == FeatureFlagState.DISABLED and f.stability == FeatureFlagStability.STABLE
        ]

    def _close_credentials(self) -> None:
        """Закрыть логгер и затереть пароль."""
        if self._logger is not None:
            self._logger.close()
        self._password.close()


class Client(ClientCore):
    """
    Блокирующий клиент RabbitMQ HTTP API поверх requests.

    Features:
        - Connection pooling (HTTPAdapter) и отдельная сессия на каждый поток
        - Повторы с фиксированной паузой (RetryConfig)
        - Immutable конфигурация: один Client безопасно использовать из нескольких потоков
        - Контекстный менеджер для освобождения ресурсов и затирания пароля

    Example:
        >>> with Client(ClientConfig(username="admin"), password="s3kRe7") as client:
        ...     client.declare_queue("/", QueueParams.new_quorum_queue("orders"))
        ...     client.delete_queue("/", "orders", idempotently=True)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        password: Union[str, Secret] = DEFAULT_PASSWORD,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            config: ClientConfig (endpoint, пользователь, таймауты, повторы...)
            password: Пароль для Basic auth
            session: Сессия вызывающей стороны. Её таймауты, TLS и пул
                     используются как есть, клиент её не закрывает.
        """
        super().__init__(config, password)

        object.__setattr__(self, '_owns_session', session is None)
        object.__setattr__(
            self,
            '_session_manager',
            ThreadSafeSessionManager(session_factory=self._create_session, shared_session=session)
        )
        object.__setattr__(self, '_initialized', True)

    @classmethod
    def from_env(cls, profile: Optional[str] = None, env_file: Optional[str] = None,
                 **overrides: Any) -> 'Client':
        """Клиент из переменных окружения RABBITMQ_HTTP_CLIENT_* (см. env_config)."""
        from .env_config import load_credentials_from_env, load_from_env
        config = load_from_env(profile=profile, env_file=env_file, **overrides)
        _, password = load_credentials_from_env(profile=profile, env_file=env_file)
        return cls(config, password)

    def __enter__(self):
        """Поддержка контекстного менеджера"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Автоматическое закрытие сессии при выходе из контекста"""
        self.close()
        return False

    def _create_session(self) -> requests.Session:
        """Create configured session."""
        session = requests.Session()

        adapter = HTTPAdapter(
            pool_connections=self._config.pool.pool_connections,
            pool_maxsize=self._config.pool.pool_maxsize,
            pool_block=self._config.pool.pool_block,
            max_retries=0  # Ретраи через RetryEngine
        )
        session.mount('http://', adapter)
        session.mount('https://', adapter)

        session.verify = self._config.security.verify
        if self._config.security.cert:
            session.cert = self._config.security.cert

        if self._config.headers:
            session.headers.update(self._config.headers)

        return session

    @property
    def session(self) -> requests.Session:
        """Сессия текущего потока (или сессия вызывающей стороны)."""
        return self._session_manager.get_session()

    # ==================== Управление жизненным циклом ====================

    def close(self):
        """
        Закрывает логгер, сессии (из всех потоков) и затирает пароль.

        Сессия, переданная вызывающей стороной, остаётся открытой.
        """
        self._close_credentials()
        self._session_manager.close_all()

    def __del__(self):
        """
        Автоматически вызывает close() при garbage collection,
        но выдает ResourceWarning если сессии не были закрыты явно.
        """
        try:
            if hasattr(self, "_session_manager"):
                count = self._session_manager.get_active_sessions_count()
                if count > 0:
                    warnings.warn(
                        f"Client garbage collected with {count} unclosed session(s). "
                        "Use 'with Client(...) as client:' or call client.close() explicitly.",
                        ResourceWarning,
                        stacklevel=2
                    )
                    self.close()
        except Exception:
            # interpreter shutdown
            pass

    # ==================== Транспорт ====================

    def _send(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        accept_client_error: Optional[int] = None,
        accept_server_error: Optional[int] = None,
    ) -> requests.Response:
        """
        Выполнить запрос с повторами.

        Каждая попытка, завершившаяся ошибкой транспорта или неразрешённым
        статусом, повторяется через delay_ms, пока не исчерпан max_attempts.

        Raises:
            TransportError: ошибка транспорта на последней попытке
            ResponseError: неразрешённый статус на последней попытке
        """
        url = self._url(path)
        correlation_id = self._start_request(method, url)
        request_headers = self._request_headers(headers, correlation_id)
        # caller-supplied sessions keep their own timeout
        timeout = self._config.timeout.as_tuple() if self._owns_session else None
        retry = RetryEngine(self._config.retry)
        started = time.monotonic()

        try:
            while True:
                try:
                    response = self.session.request(
                        method=method,
                        url=url,
                        json=body,
                        params=query,
                        headers=request_headers,
                        auth=HTTPBasicAuth(self._config.username, self._password.reveal()),
                        timeout=timeout,
                    )
                    ErrorHandler.check_response(
                        response.status_code, url, response.headers, response.text,
                        accept_client_error, accept_server_error,
                    )
                except requests.exceptions.RequestException as exc:
                    error = classify_requests_exception(exc, url)
                except RabbitMQHTTPClientException as exc:
                    error = exc
                else:
                    self._log_completed(method, url, response.status_code, started, retry.attempt + 1)
                    return response

                if not retry.should_retry(error):
                    self._log_failed(method, url, error, started, retry.attempt + 1)
                    raise error

                self._log_retry(method, url, error, retry.attempt + 1)
                retry.wait()
                retry.increment()
        finally:
            self._finish_request()

    def _get(self, path: str, decode: Optional[Decoder] = None, *,
             query: Optional[Mapping[str, Any]] = None, raw: bool = False):
        response = self._send("GET", path, query=query)
        return self._decode(response.url, decode, response.text, raw)

    def _put(self, path: str, body: Any = None):
        self._send("PUT", path, body=body)

    def _post(self, path: str, body: Any = None, decode: Optional[Decoder] = None):
        response = self._send("POST", path, body=body)
        return self._decode(response.url, decode, response.text)

    def _delete(self, path: str, idempotently: bool = False,
                headers: Optional[Mapping[str, str]] = None):
        self._send("DELETE", path, headers=headers,
                   accept_client_error=404 if idempotently else None)

    def _health_check(self, path: str):
        response = self._send("GET", path, accept_server_error=HEALTH_CHECK_FAILURE_STATUS)
        if response.status_code == HEALTH_CHECK_FAILURE_STATUS:
            raise self._health_check_failure(path, response.status_code, response.text)

    # ==================== Операции из нескольких запросов ====================

    def delete_binding(self, params: BindingDeletionParams, idempotently: bool = False) -> None:
        """
        Удалить binding по source, routing key и аргументам.

        Брокер адресует binding по properties key, поэтому сначала
        запрашиваются все binding получателя.

        Raises:
            NotFound: подходящего binding нет (idempotently=False)
            MultipleMatchingBindings: подошло больше одного binding
        """
        bindings = self._get(candidate_bindings_path(params), model_list(BindingInfo))
        path = self._select_binding(params, bindings, idempotently)
        if path is not None:
            self._delete(path, idempotently)

    def delete_exchanges(self, vhost: str, names: Iterable[str], idempotently: bool = False) -> None:
        for name in names:
            self.delete_exchange(vhost, name, idempotently)

    def enable_all_stable_feature_flags(self) -> None:
        """Включить все выключенные stable флаги, по одному запросу на флаг."""
        for name in self._flags_to_enable(self.list_feature_flags()):
            self.enable_feature_flag(name)

    def clear_all_runtime_parameters(self) -> None:
        for param in self.list_runtime_parameters():
            self.clear_runtime_parameter(param.component, param.vhost, param.name)

    def clear_all_runtime_parameters_of_component(self, component: str) -> None:
        for param in self.list_runtime_parameters_of_component(component):
            self.clear_runtime_parameter(param.component, param.vhost, param.name)

    def declare_policies(self, params: Iterable[PolicyParams]) -> None:
        for p in params:
            self.declare_policy(p)

    def delete_policies_in(self, vhost: str, names: Iterable[str]) -> None:
        """Idempotent: missing policies are skipped."""
        for name in names:
            self.delete_policy(vhost, name, idempotently=True)

    def declare_operator_policies(self, params: Iterable[PolicyParams]) -> None:
        for p in params:
            self.declare_operator_policy(p)

    def delete_operator_policies_in(self, vhost: str, names: Iterable[str]) -> None:
        for name in names:
            self.delete_operator_policy(vhost, name, idempotently=True)

    def probe_reachability(self) -> ReachabilityProbeOutcome:
        """
        Проверить, что API отвечает и учётные данные подходят.

        Не бросает исключений для ошибок брокера и транспорта.
        """
        started = time.monotonic()
        try:
            current_user = self.current_user()
        except RabbitMQHTTPClientException as error:
            return Unreachable(error)
        return Reached(current_user, timedelta(seconds=time.monotonic() - started))


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BUILDER
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ClientBuilder:
    """
    Пошаговая сборка Client.

    Example:
        >>> client = (ClientBuilder()
        ...           .with_endpoint("https://rabbit.local:15671/api")
        ...           .with_basic_auth_credentials("admin", "s3kRe7")
        ...           .with_retry_settings(RetryConfig(max_attempts=2, delay_ms=500))
        ...           .build())
    """

    def __init__(self):
        self._config = ClientConfig()
        self._password: Union[str, Secret] = DEFAULT_PASSWORD
        self._session: Optional[requests.Session] = None

    @classmethod
    def from_env(cls, profile: Optional[str] = None, env_file: Optional[str] = None,
                 **overrides: Any) -> 'ClientBuilder':
        from .env_config import load_credentials_from_env, load_from_env
        builder = cls()
        builder._config = load_from_env(profile=profile, env_file=env_file, **overrides)
        _, builder._password = load_credentials_from_env(profile=profile, env_file=env_file)
        return builder

    def with_endpoint(self, endpoint: str) -> 'ClientBuilder':
        self._config = self._config.with_endpoint(endpoint)
        return self

    def with_basic_auth_credentials(self, username: str, password: Union[str, Secret]) -> 'ClientBuilder':
        self._config = self._config.with_username(username)
        self._password = password
        return self

    def with_request_timeout(self, timeout: Union[float, TimeoutConfig]) -> 'ClientBuilder':
        """Ignored when a session is supplied via with_client."""
        self._config = self._config.with_timeout(timeout)
        return self

    def with_retry_settings(self, retry: RetryConfig) -> 'ClientBuilder':
        self._config = self._config.with_retry(retry)
        return self

    def with_client(self, session: requests.Session) -> 'ClientBuilder':
        self._session = session
        return self

    def with_config(self, config: ClientConfig) -> 'ClientBuilder':
        self._config = config
        return self

    def build(self) -> Client:
        return Client(self._config, self._password, session=self._session)
