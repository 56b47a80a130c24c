"""Tests for status classification in ErrorHandler."""

import pytest

from rabbitmq_http_client.core.error_handler import ErrorHandler
from rabbitmq_http_client.core.exceptions import (
    ClientErrorResponse,
    InvalidHeaderValue,
    NotFound,
    ServerErrorResponse,
)

URL = "http://localhost:15672/api/vhosts/v1"


class TestCheckResponse:

    @pytest.mark.parametrize("status", [200, 201, 204, 301])
    def test_success(self, status):
        ErrorHandler.check_response(status, URL, {}, "")

    def test_not_found(self):
        with pytest.raises(NotFound):
            ErrorHandler.check_response(404, URL, {}, "")

    def test_accepted_not_found(self):
        ErrorHandler.check_response(404, URL, {}, "", accept_client_error=404)

    def test_client_error_with_details(self):
        with pytest.raises(ClientErrorResponse) as exc_info:
            ErrorHandler.check_response(400, URL, {"content-type": "application/json"},
                                        '{"error": "bad_request", "reason": "oops"}')
        assert exc_info.value.error_details.reason == "oops"
        assert exc_info.value.headers["content-type"] == "application/json"

    def test_accepted_client_error_only_matches_its_status(self):
        with pytest.raises(ClientErrorResponse):
            ErrorHandler.check_response(409, URL, {}, "", accept_client_error=404)

    def test_server_error(self):
        with pytest.raises(ServerErrorResponse):
            ErrorHandler.check_response(503, URL, {}, "")

    def test_accepted_server_error(self):
        ErrorHandler.check_response(503, URL, {}, "", accept_server_error=503)


def test_parse_error_details_ignores_non_json():
    assert ErrorHandler.parse_error_details("<html/>") is None
    assert ErrorHandler.parse_error_details("") is None


class TestValidateHeaderValue:

    def test_valid(self):
        assert ErrorHandler.validate_header_value("X-Reason", "rolling restart") == "rolling restart"

    @pytest.mark.parametrize("value", ["a\r\nInjected: yes", "nul\0", "закрыто"])
    def test_invalid(self, value):
        with pytest.raises(InvalidHeaderValue):
            ErrorHandler.validate_header_value("X-Reason", value)
