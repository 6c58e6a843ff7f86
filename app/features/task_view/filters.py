"""
Filter stage of the task list view

Reduces a project's tasks to the ones relevant to the viewer and the active
filter selection. Every predicate is pure; a task with a missing or malformed
end date simply fails the date-based predicates.
"""

from datetime import date, timedelta
from typing import Iterable, List, Optional, Union

from app.models.task import CLOSED_STATUSES, Task, TaskStatus
from app.utils.datetime_helper import parse_date, today as current_date

from .domain import (
    DueDateWindow,
    ManagerFilter,
    MemberFilter,
    MemberFilterType,
    QuickFilter,
    ViewerContext,
)

DUE_THIS_WEEK_DAYS = 7


def matches_search(task: Task, query: str) -> bool:
    """Case-insensitive substring match against title and description"""
    if not query:
        return True
    needle = query.lower()
    if needle in (task.title or "").lower():
        return True
    return needle in (task.description or "").lower()


def is_overdue(task: Task, today: date) -> bool:
    """End date strictly before today and the task is not Done/Cancelled"""
    end = parse_date(task.end_date)
    if end is None:
        return False
    return end < today and task.status not in CLOSED_STATUSES


def _in_date_range(task: Task, start: Optional[date], end: Optional[date]) -> bool:
    task_end = parse_date(task.end_date)
    if task_end is None:
        return False
    if start is not None and task_end < start:
        return False
    if end is not None and task_end > end:
        return False
    return True


def _matches_multi_select(
    task: Task,
    criteria: Union[MemberFilter, ManagerFilter],
    today: date,
    member_ids: Iterable[str] = (),
) -> bool:
    """Quick filter first, then member set, status set and date range"""
    if criteria.quick_filter == QuickFilter.OVERDUE:
        return is_overdue(task, today)
    if criteria.quick_filter == QuickFilter.READY_TO_REVIEW:
        return task.status == TaskStatus.READY_TO_REVIEW.value

    member_ids = set(member_ids)
    if member_ids and task.user_id not in member_ids:
        return False

    if criteria.selected_statuses and task.status not in set(criteria.selected_statuses):
        return False

    if criteria.has_date_range() and not _in_date_range(task, criteria.date_range_start, criteria.date_range_end):
        return False

    return True


def _matches_due_date_window(task: Task, window: DueDateWindow, today: date) -> bool:
    if window == DueDateWindow.ALL:
        return True
    if window == DueDateWindow.OVERDUE:
        return is_overdue(task, today)

    end = parse_date(task.end_date)
    if end is None:
        return False
    if window == DueDateWindow.TODAY:
        return end == today
    # WEEK
    return today <= end <= today + timedelta(days=DUE_THIS_WEEK_DAYS)


def matches_member_filter(task: Task, criteria: MemberFilter, viewer_id: str, today: date) -> bool:
    """
    Member viewer predicate.

    Multi-select state populated by a parent view takes precedence over the
    member's own single-select dropdown.
    """
    if criteria.has_manager_overrides():
        return _matches_multi_select(task, criteria, today)

    if criteria.filter_type == MemberFilterType.MY:
        return bool(task.user_id) and task.user_id == viewer_id

    if criteria.filter_type == MemberFilterType.STATUS:
        if criteria.status_filter in ("", "all"):
            return True
        return task.status == criteria.status_filter

    return _matches_due_date_window(task, criteria.due_date_filter, today)


def matches_manager_filter(task: Task, criteria: ManagerFilter, today: date) -> bool:
    """Manager viewer predicate"""
    return _matches_multi_select(task, criteria, today, member_ids=criteria.selected_member_ids)


def filter_tasks(
    tasks: Iterable[Task],
    viewer: ViewerContext,
    criteria: Union[MemberFilter, ManagerFilter],
    search_query: str = "",
    today: Optional[date] = None,
) -> List[Task]:
    """
    Apply the search predicate and the viewer's filter variant.

    Args:
        tasks: Full task collection
        viewer: Current viewer (its id backs the "my tasks" selector)
        criteria: Filter state; the variant decides which predicate chain runs
        search_query: Free-text search
        today: Reference date for overdue/today/week (defaults to today)

    Returns:
        Matching tasks in their original order
    """
    today = today or current_date()

    if isinstance(criteria, ManagerFilter):
        def role_predicate(task: Task) -> bool:
            return matches_manager_filter(task, criteria, today)
    else:
        def role_predicate(task: Task) -> bool:
            return matches_member_filter(task, criteria, viewer.user_id, today)

    return [task for task in tasks if matches_search(task, search_query) and role_predicate(task)]
