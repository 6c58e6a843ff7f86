"""Task view feature module"""

from app.features.task_view.api import router
from app.features.task_view.service import TaskViewSession, TaskViewStore, get_task_view_store, task_view_store
from app.features.task_view.domain import (
    DueDateWindow,
    FilterCriteria,
    GroupBy,
    ManagerFilter,
    MemberFilter,
    MemberFilterType,
    QuickFilter,
    ViewerContext,
)
from app.features.task_view.schemas import PaginationInfo, TaskGroupPage, TaskListView, TaskRow

__all__ = [
    "router",
    "TaskViewSession",
    "TaskViewStore",
    "get_task_view_store",
    "task_view_store",
    "DueDateWindow",
    "FilterCriteria",
    "GroupBy",
    "ManagerFilter",
    "MemberFilter",
    "MemberFilterType",
    "QuickFilter",
    "ViewerContext",
    "PaginationInfo",
    "TaskGroupPage",
    "TaskListView",
    "TaskRow",
]
