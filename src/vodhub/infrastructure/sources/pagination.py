"""Multi-page result aggregation.

``pagecount`` is reported by the upstream and therefore untrusted; it is
always clamped by the configured page cap before any request is issued.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

import structlog

log = structlog.get_logger(__name__)

T = TypeVar("T")


def additional_page_count(pagecount: int | None, max_pages: int) -> int:
    """Number of pages to fetch after page 1.

    >>> additional_page_count(7, 5)
    4
    >>> additional_page_count(None, 5)
    0
    """
    if not isinstance(pagecount, int) or isinstance(pagecount, bool) or pagecount < 1:
        pagecount = 1
    return max(0, min(pagecount - 1, max_pages - 1))


async def gather_pages(
    fetch_page: Callable[[int], Awaitable[list[T]]],
    pages: Iterable[int],
) -> list[T]:
    """Fetch *pages* concurrently and concatenate in ascending page order.

    A page whose fetch raises contributes nothing; siblings are unaffected.
    """
    ordered = sorted(pages)
    if not ordered:
        return []

    outcomes = await asyncio.gather(
        *(fetch_page(page) for page in ordered), return_exceptions=True
    )

    merged: list[T] = []
    for page, outcome in zip(ordered, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            log.warning("page_fetch_failed", page=page, error=str(outcome))
            continue
        merged.extend(outcome)
    return merged
