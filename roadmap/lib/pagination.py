"""
Pagination arithmetic for ExecutionItemsApiResponse envelopes.

Pages are 1-indexed.
"""

import math
from typing import Optional, Sequence

from roadmap.lib.types import ExecutionItemsApiResponse, T


def expected_total_pages(total: int, limit: int) -> int:
    """Pages needed to show `total` items at `limit` per page."""
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    return math.ceil(total / limit)


def build_response(
    items: Sequence[T],
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> ExecutionItemsApiResponse[T]:
    """Wrap a full collection in a response envelope.

    Without a limit the whole collection is returned unpaginated. With a limit,
    `page` (default 1) selects the slice and page/limit/total_pages/has_more
    are filled in. Pages past the end give empty data.

    Example:
        >>> r = build_response(list(range(47)), page=5, limit=10)
        >>> len(r.data), r.total_pages, r.has_more
        (7, 5, False)
    """
    total = len(items)
    if limit is None:
        return ExecutionItemsApiResponse(data=list(items), total=total)

    if page is None:
        page = 1
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")

    total_pages = expected_total_pages(total, limit)
    start = (page - 1) * limit
    return ExecutionItemsApiResponse(
        data=list(items[start:start + limit]),
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
        has_more=page < total_pages,
    )
