"""
Tests for AsyncClient using respx mocks.
"""

import pytest

httpx = pytest.importorskip("httpx")
respx = pytest.importorskip("respx")

from rabbitmq_http_client import AsyncClient, AsyncClientBuilder, BindingDestinationType
from rabbitmq_http_client.async_client import classify_httpx_exception
from rabbitmq_http_client.core.config import ClientConfig, RetryConfig
from rabbitmq_http_client.core.exceptions import (
    ClientErrorResponse,
    ConnectionError,
    HealthCheckFailed,
    MultipleMatchingBindings,
    NotFound,
    ServerErrorResponse,
    TimeoutError,
)
from rabbitmq_http_client.params.bindings import BindingDeletionParams
from rabbitmq_http_client.responses.health_checks import ClusterAlarmCheckDetails

API = "http://localhost:15672/api"


def make_client(max_attempts=0, **kwargs):
    config = ClientConfig(endpoint=API, retry=RetryConfig(max_attempts=max_attempts, delay_ms=0))
    return AsyncClient(config, password="guest", **kwargs)


def binding(routing_key="rk", properties_key="rk"):
    return {
        "vhost": "/",
        "source": "ex1",
        "destination": "q1",
        "destination_type": "queue",
        "routing_key": routing_key,
        "arguments": {},
        "properties_key": properties_key,
    }


class TestRequests:
    """Single request operations."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_nodes(self):
        """Nodes are decoded and the request carries Basic auth."""
        route = respx.get(f"{API}/nodes").mock(
            return_value=httpx.Response(200, json=[{"name": "rabbit@a", "running": True}])
        )

        async with make_client() as client:
            nodes = await client.list_nodes()

        assert [n.name for n in nodes] == ["rabbit@a"]
        request = route.calls.last.request
        assert request.headers["Authorization"].startswith("Basic ")
        assert "X-Correlation-ID" in request.headers

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_queue_info_not_found(self):
        respx.get(f"{API}/queues/%2F/q1").mock(
            return_value=httpx.Response(404, json={"error": "Object Not Found", "reason": "Not Found"})
        )

        async with make_client() as client:
            with pytest.raises(NotFound) as exc_info:
                await client.get_queue_info("/", "q1")

        assert exc_info.value.error_details.reason == "Not Found"

    @pytest.mark.asyncio
    @respx.mock
    async def test_delete_idempotently(self):
        """404 on idempotent delete is success."""
        respx.delete(f"{API}/queues/%2F/q1").mock(return_value=httpx.Response(404))

        async with make_client() as client:
            await client.delete_queue("/", "q1", idempotently=True)

    @pytest.mark.asyncio
    @respx.mock
    async def test_delete_not_idempotently(self):
        respx.delete(f"{API}/queues/%2F/q1").mock(return_value=httpx.Response(404))

        async with make_client() as client:
            with pytest.raises(NotFound):
                await client.delete_queue("/", "q1")


class TestRetries:

    @pytest.mark.asyncio
    @respx.mock
    @pytest.mark.parametrize("max_attempts", [0, 1, 3])
    async def test_total_attempts(self, max_attempts):
        """Exhausted retries surface the last error after 1 + max_attempts requests."""
        route = respx.get(f"{API}/nodes").mock(return_value=httpx.Response(503))

        async with make_client(max_attempts) as client:
            with pytest.raises(ServerErrorResponse):
                await client.list_nodes()

        assert route.call_count == 1 + max_attempts

    @pytest.mark.asyncio
    @respx.mock
    async def test_success_after_failure(self):
        route = respx.get(f"{API}/nodes").mock(side_effect=[
            httpx.ConnectError("refused"),
            httpx.Response(200, json=[]),
        ])

        async with make_client(2) as client:
            assert await client.list_nodes() == []

        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_after_retries(self):
        respx.get(f"{API}/nodes").mock(side_effect=httpx.ConnectError("refused"))

        async with make_client(1) as client:
            with pytest.raises(ConnectionError):
                await client.list_nodes()


class TestHealthChecks:

    @pytest.mark.asyncio
    @respx.mock
    async def test_passing(self):
        respx.get(f"{API}/health/checks/alarms").mock(return_value=httpx.Response(200, json={"status": "ok"}))

        async with make_client() as client:
            await client.health_check_cluster_wide_alarms()

    @pytest.mark.asyncio
    @respx.mock
    async def test_failing(self):
        """503 is converted into HealthCheckFailed and not retried."""
        route = respx.get(f"{API}/health/checks/alarms").mock(return_value=httpx.Response(503, json={
            "status": "failed",
            "reason": "resource alarm(s) in effect",
            "alarms": [{"node": "rabbit@a", "resource": "disk"}],
        }))

        async with make_client(2) as client:
            with pytest.raises(HealthCheckFailed) as exc_info:
                await client.health_check_cluster_wide_alarms()

        assert isinstance(exc_info.value.details, ClusterAlarmCheckDetails)
        assert route.call_count == 1


class TestDeleteBinding:

    PARAMS = BindingDeletionParams("/", "ex1", "q1", BindingDestinationType.QUEUE, "rk")

    @pytest.mark.asyncio
    @respx.mock
    async def test_single_match(self):
        respx.get(f"{API}/queues/%2F/q1/bindings").mock(
            return_value=httpx.Response(200, json=[binding(), binding("other", "other")])
        )
        delete = respx.delete(f"{API}/bindings/%2F/e/ex1/q/q1/rk").mock(return_value=httpx.Response(204))

        async with make_client() as client:
            await client.delete_binding(self.PARAMS)

        assert delete.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_multiple_matches(self):
        respx.get(f"{API}/queues/%2F/q1/bindings").mock(
            return_value=httpx.Response(200, json=[binding(), binding(properties_key="rk~1")])
        )

        async with make_client() as client:
            with pytest.raises(MultipleMatchingBindings):
                await client.delete_binding(self.PARAMS)


class TestProbeReachability:

    @pytest.mark.asyncio
    @respx.mock
    async def test_reached(self):
        respx.get(f"{API}/whoami").mock(
            return_value=httpx.Response(200, json={"name": "guest", "tags": ["administrator"]})
        )

        async with make_client() as client:
            outcome = await client.probe_reachability()

        assert outcome.is_reached
        assert outcome.current_user.name == "guest"

    @pytest.mark.asyncio
    @respx.mock
    async def test_unreachable(self):
        respx.get(f"{API}/whoami").mock(return_value=httpx.Response(401))

        async with make_client() as client:
            outcome = await client.probe_reachability()

        assert not outcome.is_reached
        assert isinstance(outcome.error, ClientErrorResponse)


class TestLifecycle:

    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self):
        client = make_client()
        async with client:
            pass

        assert client.http_client.is_closed
        assert client._password.is_cleared

    @pytest.mark.asyncio
    async def test_caller_client_is_not_closed(self):
        http_client = httpx.AsyncClient()
        client = make_client(client=http_client)

        await client.close()

        assert not http_client.is_closed
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_immutable(self):
        async with make_client() as client:
            with pytest.raises(RuntimeError):
                client.anything = 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_builder(self):
        route = respx.get("http://rabbit:15672/api/overview").mock(
            return_value=httpx.Response(200, json={"rabbitmq_version": "4.0.5"})
        )

        client = (AsyncClientBuilder()
                  .with_endpoint("http://rabbit:15672/api/")
                  .with_basic_auth_credentials("admin", "s3kRe7")
                  .with_request_timeout(10)
                  .with_retry_settings(RetryConfig(1, 0))
                  .build())
        async with client:
            await client.overview()

        assert client.config.username == "admin"
        assert client.config.retry.max_attempts == 1
        assert route.called


class TestClassifyHttpxException:

    def test_timeout(self):
        assert isinstance(classify_httpx_exception(httpx.ReadTimeout("slow"), API), TimeoutError)

    def test_connect(self):
        assert isinstance(classify_httpx_exception(httpx.ConnectError("refused"), API), ConnectionError)
