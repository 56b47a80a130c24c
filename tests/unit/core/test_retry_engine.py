"""Tests for RetryEngine."""

import asyncio
import time

import pytest

from rabbitmq_http_client.core.config import RetryConfig
from rabbitmq_http_client.core.exceptions import (
    ClientErrorResponse,
    ConversionError,
    ServerErrorResponse,
    TimeoutError,
)
from rabbitmq_http_client.core.retry_engine import RetryEngine

URL = "http://localhost:15672/api/nodes"


class TestShouldRetry:

    def test_no_retries_configured(self):
        engine = RetryEngine(RetryConfig(max_attempts=0))
        assert not engine.should_retry(ServerErrorResponse(503, URL))

    def test_retry_until_exhausted(self):
        engine = RetryEngine(RetryConfig(max_attempts=2, delay_ms=0))
        error = TimeoutError("Request timeout", URL)

        decisions = []
        for _ in range(3):
            decisions.append(engine.should_retry(error))
            engine.increment()

        assert decisions == [True, True, False]

    def test_client_errors_are_retryable(self):
        engine = RetryEngine(RetryConfig(max_attempts=1))
        assert engine.should_retry(ClientErrorResponse(409, URL))

    def test_fatal_errors_are_not_retried(self):
        engine = RetryEngine(RetryConfig(max_attempts=5))
        assert not engine.should_retry(ConversionError.missing_property("uri"))

    def test_foreign_exceptions_are_not_retried(self):
        engine = RetryEngine(RetryConfig(max_attempts=5))
        assert not engine.should_retry(KeyError("x"))


class TestWait:

    def test_wait_sleeps_for_delay(self):
        engine = RetryEngine(RetryConfig(max_attempts=1, delay_ms=50))
        started = time.monotonic()
        engine.wait()
        assert time.monotonic() - started >= 0.05

    @pytest.mark.asyncio
    async def test_async_wait_can_be_cancelled(self):
        engine = RetryEngine(RetryConfig(max_attempts=1, delay_ms=10_000))
        task = asyncio.ensure_future(engine.async_wait())
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task


def test_counters():
    engine = RetryEngine(RetryConfig(max_attempts=3))
    engine.increment()
    assert engine.attempt == 1
    assert engine.remaining == 2
    engine.reset()
    assert engine.attempt == 0
