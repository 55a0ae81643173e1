"""Pagination — turns (page, limit, total_count, default_limit) into offset/limit metadata.

Invariants:
    - limit == 0 falls back to default_limit; negative page or limit is a PaginationError
    - page == 0 is normalized to 1; page beyond the last page is clamped to it
    - offset == (page - 1) * limit, always >= 0
    - Pure: no IO, no logging
"""

from dataclasses import dataclass

from users_api.core.errors import PaginationError


@dataclass(frozen=True)
class PageMeta:
    """Computed pagination window plus totals, serialized as the `meta` block."""
    page: int
    limit: int
    page_count: int
    total_count: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "per_page": self.limit,
            "page_count": self.page_count,
            "total_count": self.total_count,
        }


def compute_page(
    page: int, limit: int, total_count: int, default_limit: int,
) -> PageMeta:
    """Normalize caller-supplied page/limit against the total row count."""
    if page < 0:
        raise PaginationError(f"page must be >= 0, got {page}", field="page")
    if limit < 0:
        raise PaginationError(f"limit must be >= 0, got {limit}", field="limit")
    if default_limit <= 0:
        raise PaginationError(
            f"default limit must be > 0, got {default_limit}", field="limit",
        )
    if total_count < 0:
        raise PaginationError(
            f"total count must be >= 0, got {total_count}", field="total_count",
        )

    per_page = limit or default_limit
    page_count = (total_count + per_page - 1) // per_page
    page = min(page, page_count)
    page = max(page, 1)

    return PageMeta(
        page=page, limit=per_page,
        page_count=page_count, total_count=total_count,
    )
