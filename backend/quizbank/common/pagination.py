"""Pagination arithmetic shared by sorted and randomly sampled searches.

Inputs are assumed normalized upstream: ``page >= 1`` and
``1 <= page_size <= settings.MAX_PAGE_SIZE``. Anything else is a programming error.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict


class PaginationMetadata(BaseModel):
    """Pagination block returned next to a page of results.

    ``page`` and ``page_size`` echo the request; they are never re-derived
    from the number of documents actually returned.
    """

    model_config = ConfigDict(frozen=True)

    total: int
    page: int
    page_size: int
    total_pages: int


class PageWindow(BaseModel):
    """Full arithmetic for one page."""

    model_config = ConfigDict(frozen=True)

    skip: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


def calculate_skip(page: int, page_size: int) -> int:
    """Number of documents to skip to reach ``page``."""
    return (page - 1) * page_size


def calculate_total_pages(total: int, page_size: int) -> int:
    """Page count; zero when there is nothing to page through."""
    if total == 0:
        return 0
    return math.ceil(total / page_size)


def calculate_page_window(total: int, page: int, page_size: int) -> PageWindow:
    total_pages = calculate_total_pages(total, page_size)
    return PageWindow(
        skip=calculate_skip(page, page_size),
        limit=page_size,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


def build_pagination_metadata(total: int, page: int, page_size: int) -> PaginationMetadata:
    """Pagination metadata for a result page."""
    return PaginationMetadata(
        total=total,
        page=page,
        page_size=page_size,
        total_pages=calculate_total_pages(total, page_size),
    )
