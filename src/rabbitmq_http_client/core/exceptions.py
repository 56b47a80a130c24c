"""
Иерархия исключений RabbitMQ HTTP API клиента.

Классификация:
- retryable=True - попытку можно повторить (транспорт, ответы с ошибкой)
- fatal=True - повторять бессмысленно (конфигурация, заголовки, конвертация)

Каждое исключение запоминает стек в момент создания (атрибут ``stack``).
"""

import traceback
from typing import Any, Dict, Mapping, Optional

import requests

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RabbitMQHTTPClientException(Exception):
    """Базовое исключение клиента."""

    retryable: bool = False
    fatal: bool = False

    def __init__(self, message: str):
        self.message = message
        # Последний кадр - сам __init__, он не нужен
        self.stack = "".join(traceback.format_stack()[:-1])
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ТРАНСПОРТ (retryable=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransportError(RabbitMQHTTPClientException):
    """
    Ошибка транспорта: DNS, TCP, TLS, таймаут, оборванный ответ.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        cause: Исходное исключение HTTP библиотеки
    """
    retryable = True

    def __init__(self, message: str, url: Optional[str] = None, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        full_message = message
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)

class TimeoutError(TransportError):
    """Таймаут запроса."""
    pass

class ConnectionError(TransportError):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - Connection reset
    - TLS handshake failure
    """
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОТВЕТЫ С ОШИБКОЙ (retryable=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ResponseError(RabbitMQHTTPClientException):
    """
    Ответ API с кодом ошибки.

    Args:
        status_code: HTTP статус код
        url: URL запроса
        headers: Заголовки ответа
        body: Тело ответа (текст)
        error_details: Пара error/reason из JSON тела, если есть
    """
    retryable = True
    kind = "error"

    def __init__(
        self,
        status_code: int,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: str = "",
        error_details: Optional["ErrorDetails"] = None,
    ):
        self.status_code = status_code
        self.url = url
        self.headers: Dict[str, str] = dict(headers or {})
        self.body = body
        self.error_details = error_details

        msg = f"API responded with a {self.kind}: status code of {status_code} for {url}"
        if error_details and error_details.reason:
            msg += f": {error_details.reason}"
        super().__init__(msg)

class ClientErrorResponse(ResponseError):
    """4xx ответ, который вызывающая сторона не разрешила."""
    kind = "client error"

class ServerErrorResponse(ResponseError):
    """5xx ответ, который вызывающая сторона не разрешила."""
    kind = "server error"

class NotFound(ClientErrorResponse):
    """404: запрошенный объект не найден."""
    kind = "not found error"

    def __init__(
        self,
        url: str = "",
        headers: Optional[Mapping[str, str]] = None,
        body: str = "",
        error_details: Optional["ErrorDetails"] = None,
    ):
        super().__init__(404, url, headers, body, error_details)

class ErrorDetails:
    """Поля ``error`` и ``reason`` из JSON тела ответа."""

    __slots__ = ("error", "reason")

    def __init__(self, error: Optional[str] = None, reason: Optional[str] = None):
        self.error = error
        self.reason = reason

    @classmethod
    def from_body(cls, body: Any) -> Optional["ErrorDetails"]:
        if not isinstance(body, dict):
            return None
        error = body.get("error")
        reason = body.get("reason")
        if error is None and reason is None:
            return None
        return cls(
            error=None if error is None else str(error),
            reason=None if reason is None else str(reason),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorDetails):
            return NotImplemented
        return (self.error, self.reason) == (other.error, other.reason)

    def __repr__(self) -> str:
        return f"ErrorDetails(error={self.error!r}, reason={self.reason!r})"

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# СПЕЦИАЛЬНЫЕ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HealthCheckFailed(RabbitMQHTTPClientException):
    """
    Health check вернул 503.

    Args:
        path: Путь health check эндпоинта
        status_code: HTTP статус код
        details: Разобранные детали (см. responses.health_checks)
    """

    def __init__(self, path: str, status_code: int, details: Any):
        self.path = path
        self.status_code = status_code
        self.details = details
        reason = getattr(details, "reason", None)
        msg = f"Health check {path} failed with status code {status_code}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)

class MultipleMatchingBindings(RabbitMQHTTPClientException):
    """Под условия удаления подошло больше одного binding."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"Cannot delete a binding: {count} matching bindings were found, "
            "provide additional properties"
        )

class InvalidHeaderValue(RabbitMQHTTPClientException):
    """Значение заголовка нельзя передать по сети."""
    fatal = True

    def __init__(self, header: str, value: str):
        self.header = header
        self.value = value
        super().__init__(f"Could not convert provided value into an HTTP header value for {header}")

class ConversionError(RabbitMQHTTPClientException):
    """
    Ошибка конвертации runtime параметра в типизированную запись.

    Args:
        kind: 'missing_property' или 'invalid_value'
        argument: Имя ключа
    """
    fatal = True

    MISSING_PROPERTY = "missing_property"
    INVALID_VALUE = "invalid_value"

    def __init__(self, kind: str, argument: str):
        self.kind = kind
        self.argument = argument
        if kind == self.MISSING_PROPERTY:
            msg = f"Missing required property: {argument}"
        else:
            msg = f"Invalid value for property: {argument}"
        super().__init__(msg)

    @classmethod
    def missing_property(cls, argument: str) -> "ConversionError":
        return cls(cls.MISSING_PROPERTY, argument)

    @classmethod
    def invalid_value(cls, argument: str) -> "ConversionError":
        return cls(cls.INVALID_VALUE, argument)

class ResponseDecodingError(RabbitMQHTTPClientException):
    """Тело ответа не удалось разобрать в ожидаемую модель."""
    fatal = True

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Could not decode response from {url}: {message}")

class ConfigurationError(RabbitMQHTTPClientException):
    """Ошибка конфигурации."""
    fatal = True

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def classify_requests_exception(
    exc: Exception,
    url: str
) -> RabbitMQHTTPClientException:
    """
    Конвертировать requests.exceptions в наши исключения.

    Args:
        exc: Исключение из requests
        url: URL запроса

    Returns:
        Наше исключение с правильной классификацией

    Examples:
        >>> exc = requests.exceptions.ConnectTimeout()
        >>> our_exc = classify_requests_exception(exc, "http://localhost:15672/api/overview")
        >>> assert isinstance(our_exc, TimeoutError)
    """

    if isinstance(exc, requests.exceptions.Timeout):
        return TimeoutError("Request timeout", url, cause=exc)

    elif isinstance(exc, requests.exceptions.ConnectionError):
        return ConnectionError("Connection error", url, cause=exc)

    elif isinstance(exc, requests.exceptions.RequestException):
        return TransportError(f"Request failed: {exc}", url, cause=exc)

    else:
        return RabbitMQHTTPClientException(str(exc))
