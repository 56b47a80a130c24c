"""
Конфигурация клиента RabbitMQ HTTP API.

Все конфиги immutable (frozen dataclasses): один Client безопасно
используется из нескольких потоков и задач.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Optional, Tuple, Union, TYPE_CHECKING
from types import MappingProxyType

if TYPE_CHECKING:
    from .logging import LoggingConfig

DEFAULT_ENDPOINT = "http://localhost:15672/api"
DEFAULT_USERNAME = "guest"
DEFAULT_PASSWORD = "guest"

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TIMEOUT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TimeoutConfig:
    """
    Конфигурация таймаутов одного запроса.

    Args:
        connect: Таймаут подключения (сек)
        read: Таймаут чтения ответа (сек)

    Examples:
        >>> TimeoutConfig(connect=5, read=30)
    """
    connect: float = 5
    read: float = 30

    def __post_init__(self):
        """Валидация."""
        if self.connect <= 0:
            raise ValueError("connect timeout must be positive")
        if self.read <= 0:
            raise ValueError("read timeout must be positive")

    def as_tuple(self) -> Tuple[float, float]:
        """Вернуть как (connect, read) для requests."""
        return (self.connect, self.read)

    def as_httpx(self) -> Dict[str, float]:
        """Вернуть аргументы для httpx.Timeout."""
        return {
            "connect": self.connect,
            "read": self.read,
            "write": self.read,
            "pool": self.connect,
        }

    @classmethod
    def of(cls, timeout: Union[float, Tuple[float, float], "TimeoutConfig"]) -> "TimeoutConfig":
        """Привести число, пару (connect, read) или TimeoutConfig к TimeoutConfig."""
        if isinstance(timeout, TimeoutConfig):
            return timeout
        if isinstance(timeout, tuple):
            return cls(connect=timeout[0], read=timeout[1])
        return cls(connect=timeout, read=timeout)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# RETRY CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class RetryConfig:
    """
    Политика повторов.

    Args:
        max_attempts: Количество ДОПОЛНИТЕЛЬНЫХ попыток после первой
                      (всего попыток = 1 + max_attempts)
        delay_ms: Фиксированная пауза между попытками (мс), без jitter и backoff

    Examples:
        >>> RetryConfig()                              # без повторов
        >>> RetryConfig(max_attempts=2, delay_ms=100)  # до 3 запросов
    """
    max_attempts: int = 0
    delay_ms: int = 1000

    def __post_init__(self):
        """Валидация."""
        if self.max_attempts < 0:
            raise ValueError("max_attempts must be >= 0")
        if self.delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")

    @property
    def total_attempts(self) -> int:
        return 1 + self.max_attempts

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CONNECTION POOL CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ConnectionPoolConfig:
    """
    Пул соединений.

    Args:
        pool_connections: Количество пулов (по хостам)
        pool_maxsize: Соединений в одном пуле
        pool_block: Ждать свободное соединение вместо создания нового
    """
    pool_connections: int = 10
    pool_maxsize: int = 10
    pool_block: bool = False

    def __post_init__(self):
        """Валидация."""
        if self.pool_connections <= 0:
            raise ValueError("pool_connections must be positive")
        if self.pool_maxsize <= 0:
            raise ValueError("pool_maxsize must be positive")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SECURITY CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class SecurityConfig:
    """
    TLS настройки HTTPS подключения к management API.

    Args:
        verify_ssl: Проверять сертификат сервера
        ca_bundle: Путь к CA bundle (вместо системного)
        client_cert: Путь к клиентскому сертификату
        client_key: Путь к приватному ключу клиента
    """
    verify_ssl: bool = True
    ca_bundle: Optional[str] = None
    client_cert: Optional[str] = None
    client_key: Optional[str] = None

    def __post_init__(self):
        """Валидация."""
        if self.client_key and not self.client_cert:
            raise ValueError("client_key requires client_cert")

    @property
    def verify(self) -> Union[bool, str]:
        """Значение verify для requests/httpx."""
        if not self.verify_ssl:
            return False
        return self.ca_bundle or True

    @property
    def cert(self) -> Union[None, str, Tuple[str, str]]:
        if self.client_cert and self.client_key:
            return (self.client_cert, self.client_key)
        return self.client_cert

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CLIENT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _freeze_dict(d: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    """Read-only копия словаря заголовков."""
    return MappingProxyType(dict(d or {}))

@dataclass(frozen=True)
class ClientConfig:
    """
    Конфигурация клиента (без пароля: секрет хранится отдельно в Secret).

    Args:
        endpoint: Базовый URL вида scheme://host[:port]/api
        username: Имя пользователя для Basic auth
        timeout: Таймауты запроса
        retry: Политика повторов
        pool: Пул соединений
        security: TLS настройки
        headers: Дополнительные заголовки каждого запроса
        logging: Настройки структурного логирования (опционально)

    Examples:
        >>> config = ClientConfig.create(
        ...     endpoint="https://rabbit.local:15671/api",
        ...     username="admin",
        ...     timeout=10,
        ...     max_retries=2,
        ... )
    """
    endpoint: str = DEFAULT_ENDPOINT
    username: str = DEFAULT_USERNAME
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    pool: ConnectionPoolConfig = field(default_factory=ConnectionPoolConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    headers: Mapping[str, str] = field(default_factory=dict)
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Валидация и заморозка."""
        if not self.endpoint:
            raise ValueError("endpoint must not be empty")
        if not self.endpoint.startswith(("http://", "https://")):
            raise ValueError(f"endpoint must be an http(s) URL, got: {self.endpoint}")
        object.__setattr__(self, 'endpoint', self.endpoint.rstrip("/"))
        object.__setattr__(self, 'headers', _freeze_dict(self.headers))

    @classmethod
    def create(
        cls,
        endpoint: str = DEFAULT_ENDPOINT,
        username: str = DEFAULT_USERNAME,
        timeout: Union[float, Tuple[float, float], TimeoutConfig] = 30,
        max_retries: int = 0,
        retry_delay_ms: int = 1000,
        verify_ssl: bool = True,
        ca_bundle: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        logging: Optional['LoggingConfig'] = None,
        **kwargs
    ) -> 'ClientConfig':
        """
        Упрощённое создание конфига из простых значений.

        Args:
            endpoint: Базовый URL API
            username: Пользователь
            timeout: Число, пара (connect, read) или TimeoutConfig
            max_retries: Дополнительные попытки
            retry_delay_ms: Пауза между попытками
            verify_ssl: Проверка сертификата
            ca_bundle: CA bundle
            headers: Заголовки
            logging: LoggingConfig
            **kwargs: pool / security целиком
        """
        security = kwargs.pop('security', None) or SecurityConfig(verify_ssl=verify_ssl, ca_bundle=ca_bundle)
        return cls(
            endpoint=endpoint,
            username=username,
            timeout=TimeoutConfig.of(timeout),
            retry=RetryConfig(max_attempts=max_retries, delay_ms=retry_delay_ms),
            security=security,
            headers=headers or {},
            logging=logging,
            **kwargs
        )

    def with_endpoint(self, endpoint: str) -> 'ClientConfig':
        """Новый конфиг с другим endpoint."""
        return replace(self, endpoint=endpoint)

    def with_username(self, username: str) -> 'ClientConfig':
        """Новый конфиг с другим пользователем."""
        return replace(self, username=username)

    def with_timeout(self, timeout: Union[float, Tuple[float, float], TimeoutConfig]) -> 'ClientConfig':
        """
        Новый конфиг с изменённым timeout.

        Example:
            >>> new_config = config.with_timeout(60)
        """
        return replace(self, timeout=TimeoutConfig.of(timeout))

    def with_retry(self, retry: RetryConfig) -> 'ClientConfig':
        """Новый конфиг с другой политикой повторов."""
        return replace(self, retry=retry)

    def with_headers(self, headers: Dict[str, str]) -> 'ClientConfig':
        """
        Новый конфиг с дополнительными заголовками.

        Example:
            >>> new_config = config.with_headers({"X-Team": "platform"})
        """
        merged = dict(self.headers)
        merged.update(headers)
        return replace(self, headers=merged)

    def with_logging(self, logging: Optional['LoggingConfig']) -> 'ClientConfig':
        return replace(self, logging=logging)
