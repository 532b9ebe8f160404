"""Page slicing for ranked result lists."""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

from tasktree.core.config import Settings
from tasktree.core.exceptions import QueryValidationError
from tasktree.core.models import PaginatedResult, PaginationInfo, SearchQuery

T = TypeVar("T")


def build_pagination_info(total_items: int, page: int, page_size: int) -> PaginationInfo:
    """Compute navigation metadata for *page* of a list of *total_items*.

    ``current_page`` is clamped into ``[1, total_pages]`` (and reports 1
    for an empty list), while the next/previous flags are derived from the
    page that was actually requested.
    """
    if page_size <= 0:
        raise QueryValidationError(f"page_size must be positive, got {page_size}")

    total_pages = math.ceil(total_items / page_size)
    return PaginationInfo(
        current_page=max(1, min(page, total_pages)),
        total_pages=total_pages,
        page_size=page_size,
        total_items=total_items,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
    )


def paginate(items: Sequence[T], page: int, page_size: int) -> PaginatedResult[T]:
    """Return the *page*-th slice (1-based) of *items*.

    An out-of-range *page* is not an error: the slice uses the requested
    page as-is, so it comes back empty, while the metadata still reports
    a clamped ``current_page``.
    """
    pagination = build_pagination_info(len(items), page, page_size)

    start = (page - 1) * page_size
    end = start + page_size
    if end <= 0:
        # Pages at or below zero start before the list; never wrap around.
        page_items: list[T] = []
    else:
        page_items = list(items[max(start, 0):end])

    return PaginatedResult(items=page_items, pagination=pagination)


def resolve_page(query: SearchQuery, settings: Settings) -> tuple[int, int]:
    """Return ``(page, page_size)`` for *query*, defaulting to page 1 and the configured size."""
    page = query.page if query.page is not None else 1
    page_size = query.page_size if query.page_size is not None else settings.search.page_size
    return page, page_size
