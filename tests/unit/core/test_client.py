"""Тесты блокирующего клиента: запросы, повторы, ошибки, составные операции."""

import base64
import json
import logging
import time

import pytest
import requests
import responses as responses_lib
from responses import matchers

from rabbitmq_http_client import (
    BindingDestinationType,
    Client,
    ClientBuilder,
    ClientConfig,
    PaginationParams,
    PolicyTarget,
    RetryConfig,
    Secret,
)
from rabbitmq_http_client.core.exceptions import (
    ClientErrorResponse,
    ConnectionError,
    HealthCheckFailed,
    InvalidHeaderValue,
    MultipleMatchingBindings,
    NotFound,
    ResponseDecodingError,
    ServerErrorResponse,
)
from rabbitmq_http_client.params.bindings import BindingDeletionParams
from rabbitmq_http_client.params.policies import PolicyParams
from rabbitmq_http_client.params.queues import QueueParams
from rabbitmq_http_client.params.vhosts import VirtualHostParams
from rabbitmq_http_client.responses.health_checks import ClusterAlarmCheckDetails

API = "http://localhost:15672/api"


def binding(source="ex1", destination="q1", routing_key="rk", properties_key="rk", arguments=None):
    return {
        "vhost": "/",
        "source": source,
        "destination": destination,
        "destination_type": "queue",
        "routing_key": routing_key,
        "arguments": arguments or {},
        "properties_key": properties_key,
    }


class TestRequests:

    def test_list_nodes(self, client, mock_responses):
        mock_responses.get(f"{API}/nodes", json=[{"name": "rabbit@a", "running": True}])

        nodes = client.list_nodes()

        assert [n.name for n in nodes] == ["rabbit@a"]
        request = mock_responses.calls[0].request
        assert request.headers["Authorization"].startswith("Basic ")
        assert "X-Correlation-ID" in request.headers

    def test_bind_queue_body(self, client, mock_responses):
        """POST bindings/%2F/e/ex1/q/q1 с телом {"routing_key": "rk"} без arguments."""
        mock_responses.post(
            f"{API}/bindings/%2F/e/ex1/q/q1",
            status=201,
            match=[matchers.json_params_matcher({"routing_key": "rk"}, strict_match=True)],
        )

        client.bind_queue("/", "q1", "ex1", "rk", None)

        assert len(mock_responses.calls) == 1

    def test_declare_queue(self, client, mock_responses):
        mock_responses.put(
            f"{API}/queues/%2F/orders",
            status=201,
            match=[matchers.json_params_matcher({
                "durable": True, "auto_delete": False, "exclusive": False,
                "arguments": {"x-queue-type": "quorum"},
            })],
        )

        client.declare_queue("/", QueueParams.new_quorum_queue("orders"))

    def test_paged_query(self, client, mock_responses):
        mock_responses.get(
            f"{API}/queues",
            json={"items": [{"name": "q1", "vhost": "/"}], "page": 1, "page_count": 1,
                  "page_size": 50, "item_count": 1, "total_count": 1, "filtered_count": 1},
            match=[matchers.query_param_matcher({"page": "1", "page_size": "50"})],
        )

        queues = client.list_queues_paged(PaginationParams.first_page(50))

        assert [q.name for q in queues] == ["q1"]

    def test_close_connection_reason_header(self, client, mock_responses):
        mock_responses.delete(f"{API}/connections/conn1", status=204)

        client.close_connection("conn1", reason="maintenance window")

        assert mock_responses.calls[0].request.headers["X-Reason"] == "maintenance window"

    def test_invalid_reason_is_rejected_before_sending(self, client, mock_responses):
        with pytest.raises(InvalidHeaderValue):
            client.close_connection("conn1", reason="line\nbreak")
        assert len(mock_responses.calls) == 0

    def test_undecodable_body(self, client, mock_responses):
        mock_responses.get(f"{API}/nodes", body="<html>proxy error</html>")

        with pytest.raises(ResponseDecodingError):
            client.list_nodes()

    def test_export_definitions_as_string(self, client, mock_responses):
        mock_responses.get(f"{API}/definitions", body='{"users": []}')

        assert client.export_cluster_wide_definitions_as_string() == '{"users": []}'

    def test_matching_policies_sorted_by_priority(self, client, mock_responses):
        mock_responses.get(f"{API}/policies/%2F", json=[
            {"vhost": "/", "name": "low", "pattern": "^q", "apply-to": "queues", "priority": 1, "definition": {}},
            {"vhost": "/", "name": "ex", "pattern": "^q", "apply-to": "exchanges", "priority": 9, "definition": {}},
            {"vhost": "/", "name": "high", "pattern": "^q1$", "apply-to": "all", "priority": 5, "definition": {}},
        ])

        policies = client.list_matching_policies("/", "q1", PolicyTarget.QUORUM_QUEUES)

        assert [p.name for p in policies] == ["high", "low"]

    def test_policies_for_target_keep_those_within_target(self, client, mock_responses):
        mock_responses.get(f"{API}/policies/%2F", json=[
            {"vhost": "/", "name": "any-queue", "pattern": ".*", "apply-to": "queues", "definition": {}},
            {"vhost": "/", "name": "qq", "pattern": ".*", "apply-to": "quorum_queues", "definition": {}},
            {"vhost": "/", "name": "everything", "pattern": ".*", "apply-to": "all", "definition": {}},
            {"vhost": "/", "name": "ex", "pattern": ".*", "apply-to": "exchanges", "definition": {}},
        ])

        assert [p.name for p in client.list_policies_for_target("/", PolicyTarget.QUORUM_QUEUES)] == ["qq"]
        assert [p.name for p in client.list_policies_for_target("/", PolicyTarget.QUEUES)] == ["any-queue", "qq"]
        assert len(client.list_policies_for_target("/", PolicyTarget.ALL)) == 4


class TestErrors:

    def test_delete_missing_queue(self, client, mock_responses):
        """idempotently=True поглощает 404, иначе NotFound."""
        mock_responses.delete(f"{API}/queues/%2F/missing", status=404,
                              json={"error": "Object Not Found", "reason": "Not Found"})
        mock_responses.delete(f"{API}/queues/%2F/missing", status=404,
                              json={"error": "Object Not Found", "reason": "Not Found"})

        client.delete_queue("/", "missing", idempotently=True)
        with pytest.raises(NotFound) as exc_info:
            client.delete_queue("/", "missing", idempotently=False)

        assert exc_info.value.status_code == 404
        assert exc_info.value.error_details.reason == "Not Found"

    def test_client_error_details(self, client, mock_responses):
        mock_responses.put(f"{API}/vhosts/bad", status=400,
                           json={"error": "bad_request", "reason": "invalid default queue type"})

        with pytest.raises(ClientErrorResponse) as exc_info:
            client.create_vhost(VirtualHostParams.named("bad"))

        assert exc_info.value.status_code == 400
        assert "invalid default queue type" in str(exc_info.value)

    def test_transport_error(self, client, mock_responses):
        mock_responses.get(f"{API}/overview", body=requests.exceptions.ConnectionError("refused"))

        with pytest.raises(ConnectionError) as exc_info:
            client.overview()

        assert exc_info.value.retryable

    def test_health_check_failure(self, client, mock_responses):
        mock_responses.get(f"{API}/health/checks/alarms", status=503, json={
            "status": "failed",
            "reason": "resource alarm(s) in effect",
            "alarms": [{"node": "rabbit@a", "resource": "disk"}],
        })

        with pytest.raises(HealthCheckFailed) as exc_info:
            client.health_check_cluster_wide_alarms()

        assert exc_info.value.status_code == 503
        assert isinstance(exc_info.value.details, ClusterAlarmCheckDetails)

    def test_health_check_passing(self, client, mock_responses):
        mock_responses.get(f"{API}/health/checks/port-listener/5672", json={"status": "ok", "port": 5672})

        assert client.health_check_port_listener(5672) is None

    def test_health_check_other_5xx(self, client, mock_responses):
        mock_responses.get(f"{API}/health/checks/alarms", status=500)

        with pytest.raises(ServerErrorResponse):
            client.health_check_cluster_wide_alarms()


class TestRetries:

    @responses_lib.activate
    def test_retry_count_and_spacing(self):
        """max_attempts=2, delay_ms=100: ровно 3 запроса с паузой не меньше 100 мс."""
        responses_lib.add(responses_lib.GET, f"{API}/nodes", status=503)
        client = Client(ClientConfig(retry=RetryConfig(max_attempts=2, delay_ms=100)))

        started = time.monotonic()
        with pytest.raises(ServerErrorResponse) as exc_info:
            client.list_nodes()
        elapsed = time.monotonic() - started

        assert exc_info.value.status_code == 503
        assert len(responses_lib.calls) == 3
        assert elapsed >= 0.2
        client.close()

    @pytest.mark.parametrize("max_attempts", [0, 1, 4])
    def test_attempts_are_one_plus_max(self, max_attempts):
        with responses_lib.RequestsMock() as rsps:
            rsps.get(f"{API}/overview", status=500)
            with Client(ClientConfig(retry=RetryConfig(max_attempts=max_attempts, delay_ms=0))) as client:
                with pytest.raises(ServerErrorResponse):
                    client.overview()
            assert len(rsps.calls) == max_attempts + 1

    def test_succeeds_after_failures(self, retrying_client, mock_responses):
        mock_responses.get(f"{API}/whoami", status=502)
        mock_responses.get(f"{API}/whoami", json={"name": "guest", "tags": ["administrator"]})

        assert retrying_client.current_user().name == "guest"
        assert len(mock_responses.calls) == 2

    def test_client_errors_are_retried(self, retrying_client, mock_responses):
        mock_responses.get(f"{API}/vhosts/nope", status=404)

        with pytest.raises(NotFound):
            retrying_client.get_vhost("nope")

        assert len(mock_responses.calls) == 3

    def test_decoding_errors_are_not_retried(self, retrying_client, mock_responses):
        mock_responses.get(f"{API}/nodes", body="not json")

        with pytest.raises(ResponseDecodingError):
            retrying_client.list_nodes()

        assert len(mock_responses.calls) == 1


class TestDeleteBinding:

    PARAMS = BindingDeletionParams("/", "ex1", "q1", BindingDestinationType.QUEUE, "rk")

    def test_single_match(self, client, mock_responses):
        mock_responses.get(f"{API}/queues/%2F/q1/bindings", json=[
            binding(),
            binding(routing_key="other", properties_key="other"),
            binding(source="", routing_key="q1", properties_key="q1"),
        ])
        mock_responses.delete(f"{API}/bindings/%2F/e/ex1/q/q1/rk", status=204)

        client.delete_binding(self.PARAMS)

        assert mock_responses.calls[1].request.method == "DELETE"

    def test_no_match(self, client, mock_responses):
        mock_responses.get(f"{API}/queues/%2F/q1/bindings", json=[binding(routing_key="other")])

        with pytest.raises(NotFound):
            client.delete_binding(self.PARAMS)

    def test_no_match_idempotently(self, client, mock_responses):
        mock_responses.get(f"{API}/queues/%2F/q1/bindings", json=[])

        client.delete_binding(self.PARAMS, idempotently=True)

        assert len(mock_responses.calls) == 1

    def test_multiple_matches(self, client, mock_responses):
        mock_responses.get(f"{API}/queues/%2F/q1/bindings", json=[
            binding(properties_key="rk"),
            binding(properties_key="rk~hash"),
        ])

        with pytest.raises(MultipleMatchingBindings) as exc_info:
            client.delete_binding(self.PARAMS)

        assert exc_info.value.count == 2

    def test_exchange_destination(self, client, mock_responses):
        params = BindingDeletionParams("/", "ex1", "ex2", BindingDestinationType.EXCHANGE, "rk")
        mock_responses.get(f"{API}/exchanges/%2F/ex2/bindings/destination",
                           json=[dict(binding(destination="ex2"), destination_type="exchange")])
        mock_responses.delete(f"{API}/bindings/%2F/e/ex1/e/ex2/rk", status=204)

        client.delete_binding(params)


class TestBulkOperations:

    def test_enable_all_stable_feature_flags(self, client, mock_responses):
        mock_responses.get(f"{API}/feature-flags", json=[
            {"name": "quorum_queue", "state": "enabled", "stability": "required"},
            {"name": "stream_filtering", "state": "disabled", "stability": "stable"},
            {"name": "khepri_db", "state": "disabled", "stability": "experimental"},
        ])
        mock_responses.put(f"{API}/feature-flags/stream_filtering/enable", status=204,
                           match=[matchers.json_params_matcher({"name": "stream_filtering"})])

        client.enable_all_stable_feature_flags()

        assert len(mock_responses.calls) == 2

    def test_clear_all_runtime_parameters(self, client, mock_responses):
        mock_responses.get(f"{API}/parameters", json=[
            {"name": "up1", "vhost": "/", "component": "federation-upstream", "value": {"uri": "amqp://a"}},
            {"name": "s1", "vhost": "/", "component": "shovel", "value": {}},
        ])
        mock_responses.delete(f"{API}/parameters/federation-upstream/%2F/up1", status=204)
        mock_responses.delete(f"{API}/parameters/shovel/%2F/s1", status=204)

        client.clear_all_runtime_parameters()

    def test_bulk_failure_stops_at_first_error(self, client, mock_responses):
        mock_responses.put(f"{API}/policies/%2F/p1", status=400)

        with pytest.raises(ClientErrorResponse):
            client.declare_policies([
                PolicyParams("/", "p1", ".*", PolicyTarget.QUEUES),
                PolicyParams("/", "p2", ".*", PolicyTarget.QUEUES),
            ])

        assert len(mock_responses.calls) == 1

    def test_delete_policies_in_is_idempotent(self, client, mock_responses):
        mock_responses.delete(f"{API}/policies/%2F/p1", status=404)
        mock_responses.delete(f"{API}/policies/%2F/p2", status=204)

        client.delete_policies_in("/", ["p1", "p2"])


class TestProbeReachability:

    def test_reached(self, client, mock_responses):
        mock_responses.get(f"{API}/whoami", json={"name": "guest", "tags": "administrator"})

        outcome = client.probe_reachability()

        assert outcome.is_reached
        assert outcome.current_user.name == "guest"

    def test_unreachable(self, client, mock_responses):
        mock_responses.get(f"{API}/whoami", status=401)

        outcome = client.probe_reachability()

        assert not outcome.is_reached
        assert isinstance(outcome.error, ClientErrorResponse)
        assert outcome.error.status_code == 401


class TestLifecycle:

    def test_client_is_immutable(self, client):
        with pytest.raises(RuntimeError, match="immutable"):
            client.endpoint_override = "http://elsewhere"

    def test_close_clears_password(self):
        client = Client(password="s3kRe7")
        client.close()
        assert client._password.is_cleared

    def test_caller_session_is_not_closed(self, mock_responses):
        session = requests.Session()
        closed = []
        session.close = lambda: closed.append(True)
        mock_responses.get(f"{API}/overview", json={"cluster_name": "rabbit@a"})

        with ClientBuilder().with_client(session).build() as client:
            assert client.session is session
            assert client.overview().cluster_name == "rabbit@a"

        assert closed == []

    def test_builder(self):
        client = (ClientBuilder()
                  .with_endpoint("https://rabbit.local:15671/api/")
                  .with_basic_auth_credentials("admin", "s3kRe7")
                  .with_request_timeout(10)
                  .with_retry_settings(RetryConfig(max_attempts=3, delay_ms=250))
                  .build())

        assert client.endpoint == "https://rabbit.local:15671/api"
        assert client.username == "admin"
        assert client.config.timeout.as_tuple() == (10, 10)
        assert client.retry_settings.total_attempts == 4
        client.close()

    def test_closing_one_client_keeps_shared_secret_of_another(self, mock_responses):
        """Клиенты из одного builder не делят буфер пароля."""
        password = Secret("pw")
        builder = ClientBuilder().with_endpoint(API).with_basic_auth_credentials("u", password)
        first, second = builder.build(), builder.build()
        mock_responses.get(f"{API}/overview", json={"cluster_name": "rabbit@a"})

        first.close()

        assert not password.is_cleared
        assert second.overview().cluster_name == "rabbit@a"
        expected = "Basic " + base64.b64encode(b"u:pw").decode("ascii")
        assert mock_responses.calls[0].request.headers["Authorization"] == expected
        second.close()

    def test_endpoint_with_trailing_slash(self, mock_responses):
        mock_responses.get(f"{API}/overview", json={})

        with Client(ClientConfig(endpoint=f"{API}/")) as client:
            client.overview()


class TestLogging:

    def test_structured_log_file(self, logging_config_with_file, mock_responses):
        """JSON записи запроса попадают в файл, Authorization в них нет."""
        mock_responses.get(f"{API}/nodes", json=[])

        with Client(ClientConfig(endpoint=API, logging=logging_config_with_file), password="s3kRe7") as client:
            client.list_nodes()

        with open(logging_config_with_file.file_path, encoding="utf-8") as f:
            text = f.read()
        records = [json.loads(line) for line in text.splitlines()]

        assert [r["message"] for r in records] == ["Request started", "Request completed"]
        assert records[1]["status_code"] == 200
        assert records[0]["correlation_id"] == records[1]["correlation_id"]
        assert "Basic" not in text
        assert "s3kRe7" not in text

    def test_console_output(self, logging_config, mock_responses, capsys):
        mock_responses.get(f"{API}/nodes", json=[])

        with Client(ClientConfig(endpoint=API, logging=logging_config)) as client:
            client.list_nodes()

        assert "Request completed" in capsys.readouterr().out

    def test_module_logger_without_config(self, retrying_client, mock_responses, caplog):
        mock_responses.get(f"{API}/nodes", status=503)
        mock_responses.get(f"{API}/nodes", json=[])
        caplog.set_level(logging.DEBUG, logger="rabbitmq_http_client.core.client")

        retrying_client.list_nodes()

        retries = [r for r in caplog.records if r.message == "Request failed (will retry)"]
        assert len(retries) == 1
        assert retries[0].levelno == logging.WARNING
        assert retries[0].error_type == "ServerErrorResponse"
        assert "Request completed" in caplog.messages

    def test_clients_do_not_share_handlers(self, logging_config, mock_responses, capsys):
        mock_responses.get(f"{API}/nodes", json=[])
        first = Client(ClientConfig(endpoint=API, logging=logging_config))
        second = Client(ClientConfig(endpoint=API, logging=logging_config))

        assert first._logger._logger is not second._logger._logger
        assert first._logger._logger.handlers

        first.close()
        assert second._logger._logger.handlers
        second.list_nodes()
        assert "Request completed" in capsys.readouterr().out
        second.close()
