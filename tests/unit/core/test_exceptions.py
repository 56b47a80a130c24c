"""Тесты иерархии исключений и классификации ошибок транспорта."""

import requests

from rabbitmq_http_client.core.exceptions import (
    ClientErrorResponse,
    ConfigurationError,
    ConnectionError,
    ConversionError,
    ErrorDetails,
    HealthCheckFailed,
    InvalidHeaderValue,
    MultipleMatchingBindings,
    NotFound,
    RabbitMQHTTPClientException,
    ResponseDecodingError,
    ResponseError,
    ServerErrorResponse,
    TimeoutError,
    TransportError,
    classify_requests_exception,
)

URL = "http://localhost:15672/api/queues/%2F/q1"


class TestHierarchy:

    def test_not_found_is_client_error(self):
        error = NotFound(URL)
        assert isinstance(error, ClientErrorResponse)
        assert isinstance(error, ResponseError)
        assert error.status_code == 404

    def test_transport_errors(self):
        assert issubclass(TimeoutError, TransportError)
        assert issubclass(ConnectionError, TransportError)
        assert TransportError("x").retryable

    def test_fatal_errors(self):
        for error in (InvalidHeaderValue("X-Reason", "\n"), ConversionError.invalid_value("ack-mode"),
                      ResponseDecodingError(URL, "bad"), ConfigurationError("bad")):
            assert error.fatal
            assert isinstance(error, RabbitMQHTTPClientException)

    def test_stack_is_captured(self):
        error = ServerErrorResponse(503, URL)
        assert "test_stack_is_captured" in error.stack


class TestMessages:

    def test_response_error_includes_reason(self):
        error = ClientErrorResponse(400, URL, body="{}", error_details=ErrorDetails("bad_request", "inequivalent arg"))
        assert str(error) == f"API responded with a client error: status code of 400 for {URL}: inequivalent arg"

    def test_server_error(self):
        assert "server error: status code of 503" in str(ServerErrorResponse(503, URL))

    def test_multiple_matching_bindings(self):
        assert MultipleMatchingBindings(3).count == 3

    def test_health_check_failed(self):
        class Details:
            reason = "alarm in effect"

        error = HealthCheckFailed("health/checks/alarms", 503, Details())
        assert str(error).endswith("alarm in effect")

    def test_conversion_error(self):
        error = ConversionError.missing_property("src-uri")
        assert error.kind == ConversionError.MISSING_PROPERTY
        assert str(error) == "Missing required property: src-uri"


class TestErrorDetails:

    def test_from_body(self):
        assert ErrorDetails.from_body({"error": "not_found", "reason": "no queue"}) == ErrorDetails("not_found", "no queue")

    def test_from_body_without_fields(self):
        assert ErrorDetails.from_body({"status": "ok"}) is None
        assert ErrorDetails.from_body(["x"]) is None


class TestClassifyRequestsException:

    def test_timeout(self):
        error = classify_requests_exception(requests.exceptions.ReadTimeout(), URL)
        assert isinstance(error, TimeoutError)
        assert error.url == URL

    def test_connection(self):
        assert isinstance(classify_requests_exception(requests.exceptions.ConnectionError(), URL), ConnectionError)

    def test_other_request_exception(self):
        error = classify_requests_exception(requests.exceptions.ChunkedEncodingError("broken"), URL)
        assert type(error) is TransportError
        assert isinstance(error.cause, requests.exceptions.ChunkedEncodingError)
