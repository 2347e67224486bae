"""Page/count normalization for listing requests."""

import math
from dataclasses import dataclass

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 200

# page and count arrive as 32-bit integers
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


@dataclass(frozen=True)
class Pagination:
    """Normalized, zero-based page index and page size."""

    page: int
    count: int

    @property
    def skip(self) -> int:
        return self.page * self.count

    @property
    def take(self) -> int:
        return self.count


def normalize_pagination(page: int, count: int) -> Pagination:
    """
    Bound raw page/count query values.

    Negative pages clamp to the first page and pages above INT32_MAX clamp
    to INT32_MAX, so the row offset always fits a 64-bit integer. A
    non-positive count falls back to the default page size; any other count
    is capped at MAX_PAGE_SIZE.
    Never raises.
    """
    page = min(max(0, page), INT32_MAX)
    if count <= 0:
        count = DEFAULT_PAGE_SIZE
    count = min(max(count, 1), MAX_PAGE_SIZE)
    return Pagination(page=page, count=count)


def total_pages(total_count: int, count: int) -> int:
    """Number of pages needed for total_count records; 0 for an empty set."""
    return math.ceil(total_count / count)
