"""Tests for PaginationParams."""

import pytest

from rabbitmq_http_client.pagination import PaginationParams


def test_first_page_default_size():
    assert PaginationParams.first_page().to_query_string() == "page=1&page_size=100"


def test_page_size_is_clamped():
    params = PaginationParams(page=2, page_size=9000)
    assert params.page_size == 500
    assert params.to_query_params() == {"page": 2, "page_size": 500}


def test_page_without_size_uses_default():
    assert PaginationParams(page=3).to_query_string() == "page=3&page_size=100"


def test_no_page_means_no_query():
    assert PaginationParams().to_query_string() is None
    assert PaginationParams(page_size=10).to_query_params() is None


@pytest.mark.parametrize("kwargs", [{"page": 0}, {"page": 1, "page_size": 0}])
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        PaginationParams(**kwargs)


def test_next_page_keeps_size():
    assert PaginationParams.first_page(50).next_page() == PaginationParams(page=2, page_size=50)


def test_is_last_page():
    params = PaginationParams.first_page(2)
    assert params.is_last_page([])
    assert params.is_last_page(["a"])
    assert not params.is_last_page(["a", "b"])
