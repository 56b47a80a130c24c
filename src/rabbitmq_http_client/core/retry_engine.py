"""
Retry engine с фиксированной паузой.

Состояние (счётчик попыток) живёт в одном экземпляре на один вызов,
поэтому сам Client не хранит изменяемого состояния между запросами.
"""

import asyncio
import logging
import time

from .config import RetryConfig

logger = logging.getLogger(__name__)


class RetryEngine:
    """
    Повторы с фиксированной задержкой (без jitter и backoff).

    Examples:
        >>> engine = RetryEngine(RetryConfig(max_attempts=2, delay_ms=100))
        >>> if engine.should_retry(error):
        >>>     engine.wait()
        >>>     engine.increment()
    """

    def __init__(self, config: RetryConfig):
        """
        Args:
            config: Политика повторов
        """
        self.config = config
        self._attempt = 0

    def should_retry(self, error: Exception) -> bool:
        """
        Решить, нужна ли ещё одна попытка.

        Повторяются все ошибки транспорта и все неразрешённые статусы
        (включая 4xx), пока не исчерпан лимит дополнительных попыток.

        Args:
            error: Исключение последней попытки

        Returns:
            True если нужен retry
        """
        if self._attempt >= self.config.max_attempts:
            return False

        if getattr(error, 'fatal', False):
            return False

        return bool(getattr(error, 'retryable', False))

    def get_wait_time(self) -> float:
        """Секунды до следующей попытки."""
        return self.config.delay_seconds

    def wait(self) -> None:
        """Блокирующее ожидание перед retry."""
        wait_time = self.get_wait_time()
        if wait_time > 0:
            time.sleep(wait_time)

    async def async_wait(self) -> None:
        """
        Асинхронное ожидание перед retry.

        Отмена задачи прерывает ожидание (asyncio.CancelledError).
        """
        wait_time = self.get_wait_time()
        if wait_time > 0:
            await asyncio.sleep(wait_time)

    def increment(self) -> None:
        """Отметить выполненный повтор."""
        self._attempt += 1

    def reset(self) -> None:
        self._attempt = 0

    @property
    def attempt(self) -> int:
        """Номер текущего повтора (0 - первая попытка)."""
        return self._attempt

    @property
    def remaining(self) -> int:
        return self.config.max_attempts - self._attempt
