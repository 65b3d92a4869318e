import pytest
from gitlab_mcp.core.pagination import (
    PAGINATION_DEFAULTS,
    PaginatedResult,
    empty_paginated_result,
    normalize_pagination,
    paginated_result,
    pagination_query,
    parse_pagination_headers,
)


def test_defaults():
    assert PAGINATION_DEFAULTS == {"per_page": 20, "max_per_page": 100}


def test_normalize_applies_default_and_clamp():
    assert normalize_pagination(None, None) == (None, 20)
    assert normalize_pagination(2, 150) == (2, 100)
    assert normalize_pagination(1, 0) == (1, 1)
    assert normalize_pagination(None, 7, default_per_page=5, max_per_page=6) == (
        None,
        6,
    )


@pytest.mark.parametrize("page", [0, -3])
def test_page_below_one_rejected(page):
    with pytest.raises(ValueError):
        normalize_pagination(page, 10)
    with pytest.raises(ValueError):
        pagination_query(page, 10)


def test_pagination_query_omits_absent_values():
    assert pagination_query() == {}
    assert pagination_query(3, 50) == {"page": 3, "per_page": 50}
    assert pagination_query(per_page=20) == {"per_page": 20}


def test_parse_headers_full_set():
    meta = parse_pagination_headers(
        {"X-Total": "42", "X-Total-Pages": "3", "X-Page": "1", "X-Next-Page": "2"}
    )
    assert (meta.total, meta.total_pages, meta.page, meta.next_page) == (42, 3, 1, 2)


def test_parse_headers_lowercase_and_blank():
    meta = parse_pagination_headers(
        {"x-total": "10", "x-page": "2", "x-next-page": ""}
    )
    assert meta.total == 10
    assert meta.page == 2
    assert meta.next_page is None
    assert meta.total_pages is None


def test_paginated_result_from_headers():
    meta = parse_pagination_headers(
        {"X-Total": "42", "X-Total-Pages": "3", "X-Page": "1", "X-Next-Page": "2"}
    )
    result = paginated_result([{"id": 1}, {"id": 2}], meta)
    assert result.count == 2
    assert result.total == 42
    assert result.has_more is True
    assert result.next_page == 2


def test_last_page_has_no_more():
    meta = parse_pagination_headers({"X-Total": "2", "X-Page": "1", "X-Next-Page": ""})
    result = paginated_result([1, 2], meta)
    assert result.has_more is False


def test_missing_headers_leave_fields_absent():
    result = paginated_result(["a"])
    assert result.total is None
    assert result.page is None
    assert result.has_more is False
    assert result.count == 1


def test_empty_result():
    result = empty_paginated_result()
    assert result.items == []
    assert result.count == 0
    assert result.has_more is False


def test_map_keeps_metadata():
    result = PaginatedResult(items=[1, 2, 3], total=9, page=1, next_page=2)
    doubled = result.map(lambda x: x * 2)
    assert doubled.items == [2, 4, 6]
    assert doubled.total == 9
    assert doubled.has_more is True
    assert doubled.count == 3
