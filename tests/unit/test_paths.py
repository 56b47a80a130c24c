"""Тесты кодирования сегментов пути."""

from urllib.parse import unquote

import pytest

from rabbitmq_http_client.paths import encode_segment, join_endpoint, path


def test_default_vhost_is_encoded():
    """Виртуальный хост '/' становится %2F."""
    assert path("queues", "/", "foo/bar") == "queues/%2F/foo%2Fbar"


def test_only_alphanumerics_survive():
    assert encode_segment("a.b-c_d~e f") == "a%2Eb%2Dc%5Fd%7Ee%20f"


def test_utf8_bytes_are_encoded_individually():
    assert encode_segment("é") == "%C3%A9"


def test_int_segments():
    assert path("health", "checks", "port-listener", 5672) == "health/checks/port%2Dlistener/5672"


@pytest.mark.parametrize("segment", ["/", "foo/bar", "vhost with spaces", "ключ", "a%2Fb", "x?y#z&w"])
def test_segment_decodes_back(segment):
    """unquote(encode(s)) == s и в результате нет структурных символов."""
    encoded = encode_segment(segment)
    assert unquote(encoded) == segment
    assert "/" not in encoded
    assert "?" not in encoded
    assert "#" not in encoded


def test_join_endpoint_does_not_double_slash():
    assert join_endpoint("http://localhost:15672/api/", "overview") == "http://localhost:15672/api/overview"
    assert join_endpoint("http://localhost:15672/api", "overview") == "http://localhost:15672/api/overview"
