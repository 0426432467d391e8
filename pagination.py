"""
Page arithmetic for catalog browsing.
"""

from dataclasses import dataclass
from typing import Optional

from config.settings import CATALOG_PAGE_SIZE

PAGE_SIZE = CATALOG_PAGE_SIZE


def page_count(total_count: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages needed for *total_count* items (0 when there are none)."""
    if total_count <= 0:
        return 0
    return (total_count + page_size - 1) // page_size


def has_next_page(current_page: int, pages: int) -> bool:
    return current_page + 1 < pages


def next_page(
    current_page: int,
    last_total_count: Optional[int] = None,
    page_size: int = PAGE_SIZE,
) -> int:
    """
    Advance one page.

    When a total count is known from the previous render, the result is
    clamped to the last valid page index so the page never runs past the end.
    """
    target = current_page + 1
    if last_total_count is None:
        return target
    last_index = max(0, page_count(last_total_count, page_size) - 1)
    return min(target, last_index)


def previous_page(current_page: int) -> int:
    return max(0, current_page - 1)


@dataclass(frozen=True)
class PageWindow:
    current_page: int
    page_count: int
    total_count: int

    @property
    def has_next_page(self) -> bool:
        return has_next_page(self.current_page, self.page_count)

    @property
    def is_empty(self) -> bool:
        return self.total_count == 0

    @property
    def is_beyond_last_page(self) -> bool:
        return self.total_count > 0 and self.current_page >= self.page_count


def page_window(current_page: int, total_count: int, page_size: int = PAGE_SIZE) -> PageWindow:
    return PageWindow(
        current_page=current_page,
        page_count=page_count(total_count, page_size),
        total_count=total_count,
    )
