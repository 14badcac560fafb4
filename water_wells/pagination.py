# ============================================================================
# MODULE CONTEXT - PAGINATION PLANNER
# ============================================================================
# STATUS: Core - Adaptive page sizing
# PURPOSE: Choose page count and chunk size from the matching row count
# EXPORTS: PaginationPlan, plan_pagination, DEFAULT_PAGE_BANDS
# DEPENDENCIES: stdlib only
# ============================================================================

"""
Pagination planner.

Each dataset maps result sizes to an ideal page count, e.g.
``{10000: 1, 50000: 2, 150000: 4, 500000: 5}``: up to 10k rows fit on one
page, up to 50k split over two, and so on. Beyond the largest threshold
the page count grows linearly with the total.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

# (upper bound, page count) used when a dataset has no table of its own
DEFAULT_PAGE_BANDS: Tuple[Tuple[int, int], ...] = (
    (10_000, 1),
    (50_000, 2),
    (100_000, 5),
    (250_000, 10),
)
DEFAULT_PAGE_COUNT = 25


@dataclass(frozen=True)
class PaginationPlan:
    total: int
    chunk: int
    page_count: int
    page: int = 1

    @property
    def offset(self) -> int:
        return self.chunk * (self.page - 1)

    @property
    def is_empty(self) -> bool:
        return self.total <= 0 or self.chunk <= 0


def _page_count(total: int, chunks: Optional[Mapping[int, int]]) -> int:
    if chunks:
        largest_size = 0
        largest_count = 0
        page_count = 0
        for size, count in chunks.items():
            largest_size = max(largest_size, size)
            largest_count = max(largest_count, count)
            if total <= size and (page_count == 0 or page_count > count):
                page_count = count
        if page_count == 0:
            page_count = (total // largest_size + 1) * largest_count
        return page_count

    for bound, count in DEFAULT_PAGE_BANDS:
        if total <= bound:
            return count
    return DEFAULT_PAGE_COUNT


def plan_pagination(total: int, chunks: Optional[Mapping[int, int]] = None, page: int = 1) -> PaginationPlan:
    """
    Plan pages for ``total`` matching rows.

    The chunk is the total split evenly over the page count. A last page
    shorter than a quarter chunk is spread over the other pages. Any
    other remainder gets a page of its own.

    Args:
        total: Number of matching rows
        chunks: Ordered mapping of size threshold to page count
        page: Requested 1-based page, not bounded above

    Returns:
        PaginationPlan with total, chunk, page count and page
    """
    page = page if page and page > 0 else 1
    if total <= 0:
        return PaginationPlan(total=0, chunk=0, page_count=0, page=page)

    page_count = _page_count(total, chunks)
    chunk = total // page_count
    if chunk == 0:
        # fewer rows than pages
        return PaginationPlan(total=total, chunk=total, page_count=1, page=page)

    remainder = total % chunk
    if 0 < remainder < chunk // 4:
        chunk += remainder // page_count
    elif remainder > 0:
        page_count += 1

    return PaginationPlan(total=total, chunk=chunk, page_count=page_count, page=page)
