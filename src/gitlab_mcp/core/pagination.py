"""
Page/per_page request mapping and GitLab pagination header decoding.

GitLab reports pagination in response headers (X-Total, X-Total-Pages, X-Page,
X-Next-Page). Some endpoints omit them (large collections drop X-Total, a few
sub-resources send none at all), so every field is independently optional.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100

PAGINATION_DEFAULTS = {"per_page": DEFAULT_PER_PAGE, "max_per_page": MAX_PER_PAGE}

TOTAL_HEADER = "X-Total"
TOTAL_PAGES_HEADER = "X-Total-Pages"
PAGE_HEADER = "X-Page"
NEXT_PAGE_HEADER = "X-Next-Page"
PER_PAGE_HEADER = "X-Per-Page"


def _check_page(page: Optional[int]) -> None:
    if page is not None and page < 1:
        raise ValueError("page must be >= 1")


def normalize_pagination(
    page: Optional[int] = None,
    per_page: Optional[int] = None,
    *,
    default_per_page: int = DEFAULT_PER_PAGE,
    max_per_page: int = MAX_PER_PAGE,
) -> Tuple[Optional[int], int]:
    """Apply the default policy: missing per_page -> default, clamp into [1, max]."""
    _check_page(page)
    if per_page is None:
        per_page = default_per_page
    return page, max(1, min(per_page, max_per_page))


def pagination_query(
    page: Optional[int] = None, per_page: Optional[int] = None
) -> Dict[str, int]:
    """Map a page request onto GitLab query params; absent values are omitted."""
    _check_page(page)
    params: Dict[str, int] = {}
    if per_page is not None:
        params["per_page"] = per_page
    if page is not None:
        params["page"] = page
    return params


@dataclass(frozen=True)
class PaginationMeta:
    total: Optional[int] = None
    total_pages: Optional[int] = None
    page: Optional[int] = None
    next_page: Optional[int] = None
    per_page: Optional[int] = None


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is None:
        lowered = name.lower()
        for key, candidate in headers.items():
            if key.lower() == lowered:
                return candidate
    return value


def _int_or_none(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def parse_pagination_headers(headers: Mapping[str, str]) -> PaginationMeta:
    """Decode pagination headers; missing or malformed values become None."""
    return PaginationMeta(
        total=_int_or_none(_header(headers, TOTAL_HEADER)),
        total_pages=_int_or_none(_header(headers, TOTAL_PAGES_HEADER)),
        page=_int_or_none(_header(headers, PAGE_HEADER)),
        next_page=_int_or_none(_header(headers, NEXT_PAGE_HEADER)),
        per_page=_int_or_none(_header(headers, PER_PAGE_HEADER)),
    )


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """
    Items of one page plus whatever pagination metadata upstream reported.

    `count` is always len(items); `has_more` follows `next_page` unless the
    caller states it explicitly.
    """

    items: List[T]
    total: Optional[int] = None
    page: Optional[int] = None
    next_page: Optional[int] = None
    total_pages: Optional[int] = None
    has_more: Optional[bool] = None
    count: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", list(self.items))
        object.__setattr__(self, "count", len(self.items))
        if self.has_more is None:
            object.__setattr__(self, "has_more", self.next_page is not None)

    def map(self, fn) -> "PaginatedResult[Any]":
        return replace(self, items=[fn(item) for item in self.items])


def paginated_result(
    items: Sequence[T],
    meta: Optional[PaginationMeta] = None,
    *,
    has_more: Optional[bool] = None,
) -> PaginatedResult[T]:
    meta = meta or PaginationMeta()
    return PaginatedResult(
        items=list(items),
        total=meta.total,
        page=meta.page,
        next_page=meta.next_page,
        total_pages=meta.total_pages,
        has_more=has_more,
    )


def empty_paginated_result() -> PaginatedResult[Any]:
    return PaginatedResult(items=[], has_more=False)


__all__ = [
    "DEFAULT_PER_PAGE",
    "MAX_PER_PAGE",
    "PAGINATION_DEFAULTS",
    "PaginationMeta",
    "PaginatedResult",
    "normalize_pagination",
    "pagination_query",
    "parse_pagination_headers",
    "paginated_result",
    "empty_paginated_result",
]
