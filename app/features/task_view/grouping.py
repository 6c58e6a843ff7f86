"""Group stage of the task list view and display-name resolution"""

import logging
from typing import Dict, Iterable, List, Mapping

from app.models.member import Member
from app.models.task import Task, TaskStatus

from .domain import GroupBy

logger = logging.getLogger(__name__)

ALL_TASKS_LABEL = "All"
UNASSIGNED_LABEL = "Unassigned"
UNKNOWN_STATUS_LABEL = "Unknown"
NO_MILESTONE_LABEL = "No Milestone"
SINGLE_MILESTONE_LABEL = "Single Milestone"
MULTIPLE_MILESTONES_LABEL = "Multiple Milestones"

TASK_STATUS_LABELS: Dict[str, str] = {
    TaskStatus.NOT_STARTED.value: "Not Started",
    TaskStatus.TODO.value: "Todo",
    TaskStatus.IN_PROGRESS.value: "In Progress",
    TaskStatus.READY_TO_REVIEW.value: "Ready To Review",
    TaskStatus.RE_OPENED.value: "Re-Opened",
    TaskStatus.DONE.value: "Done",
    TaskStatus.CANCELLED.value: "Cancelled",
}


def get_status_label(status: str) -> str:
    """Human-readable status; unmapped values fall back to the raw string"""
    if not status:
        return UNKNOWN_STATUS_LABEL
    label = TASK_STATUS_LABELS.get(status)
    if label is None:
        logger.debug(f"No label for task status '{status}', using raw value")
        return status
    return label


def build_member_names(members: Iterable[Member]) -> Dict[str, str]:
    """Member id -> display name lookup table, built once per render"""
    return {member.id: member.name for member in members}


def resolve_assignee_name(task: Task, member_names: Mapping[str, str]) -> str:
    """
    Display name of a task's assignee.

    Fallback order: embedded user (full name, then email), lookup table,
    raw assignee id, and "Unassigned" when the task has no assignee id.
    """
    if task.user is not None:
        embedded = task.user.full_name or task.user.email
        if embedded:
            return embedded
    if task.user_id:
        return member_names.get(task.user_id) or task.user_id
    return UNASSIGNED_LABEL


def milestone_bucket(task: Task) -> str:
    """Coarse milestone category by number of linked milestones"""
    count = len(task.milestone_ids)
    if count == 0:
        return NO_MILESTONE_LABEL
    return SINGLE_MILESTONE_LABEL if count == 1 else MULTIPLE_MILESTONES_LABEL


def group_key(task: Task, group_by: GroupBy, member_names: Mapping[str, str]) -> str:
    if group_by == GroupBy.STATUS:
        return get_status_label(task.status)
    if group_by == GroupBy.ASSIGNEE:
        return resolve_assignee_name(task, member_names) or UNASSIGNED_LABEL
    if group_by == GroupBy.MILESTONE:
        return milestone_bucket(task)
    return ALL_TASKS_LABEL


def group_tasks(
    tasks: List[Task],
    group_by: GroupBy,
    member_names: Mapping[str, str],
) -> Dict[str, List[Task]]:
    """
    Partition tasks into labelled buckets.

    Buckets keep first-appearance order and tasks keep their relative order.
    Grouping "none" always yields exactly one "All" bucket, even when empty.
    """
    if group_by == GroupBy.NONE:
        return {ALL_TASKS_LABEL: list(tasks)}

    grouped: Dict[str, List[Task]] = {}
    for task in tasks:
        grouped.setdefault(group_key(task, group_by, member_names), []).append(task)
    return grouped
