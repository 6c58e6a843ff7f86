"""Filter -> Group -> Paginate, producing the render contract"""

from datetime import date
from typing import List, Mapping, Optional, Sequence, Union

from app import config
from app.models.member import Member
from app.models.task import CLOSED_STATUSES, Task
from app.utils.datetime_helper import format_date, overdue_days, today as current_date

from .domain import GroupBy, ManagerFilter, MemberFilter, ViewerContext
from .filters import filter_tasks
from .grouping import build_member_names, get_status_label, group_tasks, resolve_assignee_name
from .pagination import PageCursors, paginate
from .schemas import TaskGroupPage, TaskListView, TaskRow


def build_row(task: Task, index: int, member_names: Mapping[str, str], today: date) -> TaskRow:
    return TaskRow(
        index=index,
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        status_label=get_status_label(task.status),
        assignee_id=task.user_id,
        assignee_name=resolve_assignee_name(task, member_names),
        start_date=format_date(task.start_date),
        end_date=format_date(task.end_date),
        overdue_days=overdue_days(task.end_date, task.status in CLOSED_STATUSES, today),
        milestone_ids=task.milestone_ids,
    )


def build_task_list_view(
    *,
    project_id: str,
    tasks: Sequence[Task],
    members: Sequence[Member],
    viewer: ViewerContext,
    criteria: Union[MemberFilter, ManagerFilter],
    group_by: GroupBy,
    cursors: PageCursors,
    search_query: str = "",
    page_size: int = config.TASK_VIEW_PAGE_SIZE,
    today: Optional[date] = None,
    is_loading: bool = False,
    error: Optional[str] = None,
) -> TaskListView:
    """
    Run the task list pipeline over a snapshot of tasks and members.

    The member lookup table is built once here and shared by grouping and
    row rendering.
    """
    today = today or current_date()
    member_names = build_member_names(members)

    filtered = filter_tasks(tasks, viewer, criteria, search_query=search_query, today=today)
    buckets = group_tasks(filtered, group_by, member_names)

    groups: List[TaskGroupPage] = []
    for name, bucket in buckets.items():
        page_items, pagination = paginate(bucket, cursors.get(name), page_size)
        rows = [
            build_row(task, pagination.start_index + offset + 1, member_names, today)
            for offset, task in enumerate(page_items)
        ]
        groups.append(TaskGroupPage(name=name, pagination=pagination, rows=rows))

    return TaskListView(
        project_id=project_id,
        group_by=group_by,
        search_query=search_query,
        filter=criteria,
        total_tasks=len(tasks),
        filtered_count=len(filtered),
        active_filter_count=criteria.active_filter_count(),
        is_loading=is_loading,
        error=error,
        member_options=[m for m in members if m.is_member_role()],
        groups=groups,
    )
