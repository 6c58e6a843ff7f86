"""Paginate stage of the task list view"""

import math
from typing import Dict, Iterator, List, Sequence, Tuple, TypeVar, Union

from app import config

from .schemas import PaginationInfo

T = TypeVar("T")

MAX_PAGE_BUTTONS = 5
ELLIPSIS = "..."


class PageCursors:
    """Current page per bucket label; unseen labels are on page 1"""

    def __init__(self) -> None:
        self._pages: Dict[str, int] = {}

    def get(self, bucket: str) -> int:
        return self._pages.get(bucket, 1)

    def set(self, bucket: str, page: int) -> None:
        self._pages[bucket] = page

    def reset(self) -> None:
        self._pages.clear()

    def as_dict(self) -> Dict[str, int]:
        return dict(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[str]:
        return iter(self._pages)


def page_numbers(current_page: int, total_pages: int, max_buttons: int = MAX_PAGE_BUTTONS) -> List[Union[int, str]]:
    """
    Page buttons to show: first and last always, a window around the current
    page, and "..." where pages are skipped.
    """
    if total_pages <= max_buttons:
        return list(range(1, total_pages + 1))

    pages: List[Union[int, str]] = [1]

    start_page = max(2, current_page - 1)
    end_page = min(total_pages - 1, current_page + 1)

    # near the start
    if current_page <= 3:
        end_page = min(max_buttons - 1, total_pages - 1)
    # near the end
    if current_page >= total_pages - 2:
        start_page = max(2, total_pages - (max_buttons - 2))

    if start_page > 2:
        pages.append(ELLIPSIS)
    pages.extend(range(start_page, end_page + 1))
    if end_page < total_pages - 1:
        pages.append(ELLIPSIS)

    pages.append(total_pages)
    return pages


def paginate(
    items: Sequence[T],
    current_page: int = 1,
    page_size: int = config.TASK_VIEW_PAGE_SIZE,
) -> Tuple[List[T], PaginationInfo]:
    """
    Slice one bucket for the requested page.

    The page number is not clamped; an out-of-range page yields an empty
    slice. Keeping requests inside [1, total_pages] is up to the caller.
    """
    total_items = len(items)
    total_pages = math.ceil(total_items / page_size) if total_items else 0

    start_index = min(max((current_page - 1) * page_size, 0), total_items)
    end_index = min(start_index + page_size, total_items)
    page_items = list(items[start_index:end_index])

    info = f"Showing {start_index + 1}-{end_index} of {total_items}" if page_items else ""

    return page_items, PaginationInfo(
        current_page=current_page,
        total_pages=total_pages,
        total_items=total_items,
        page_size=page_size,
        start_index=start_index,
        end_index=end_index,
        can_go_previous=current_page > 1,
        can_go_next=current_page < total_pages,
        page_numbers=page_numbers(current_page, total_pages),
        info=info,
    )
