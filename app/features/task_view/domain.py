"""Domain models for the task view feature"""

from datetime import date
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class GroupBy(str, Enum):
    """Grouping mode of the task list"""
    NONE = "none"
    STATUS = "status"
    ASSIGNEE = "assignee"
    MILESTONE = "milestone"


class QuickFilter(str, Enum):
    """Manager quick presets; an active preset replaces the explicit filters"""
    NONE = "none"
    OVERDUE = "overdue"
    READY_TO_REVIEW = "readyToReview"


class MemberFilterType(str, Enum):
    """Member's single-select filter mode"""
    MY = "my"
    STATUS = "status"
    DUE_DATE = "dueDate"


class DueDateWindow(str, Enum):
    """Member's due-date filter windows"""
    OVERDUE = "overdue"
    TODAY = "today"
    WEEK = "week"
    ALL = "all"


MANAGER_ROLES = {"projectmanager", "businessowner", "admin"}

# Roles that list every project task; Admin gets manager filters but only its own tasks
PROJECT_WIDE_ROLES = {"projectmanager", "businessowner"}


class _DateRangeMixin(BaseModel):
    """Multi-select fields shared by both filter variants"""
    selected_statuses: List[str] = Field(default_factory=list)
    date_range_start: Optional[date] = None
    date_range_end: Optional[date] = None
    quick_filter: QuickFilter = QuickFilter.NONE

    @field_validator("quick_filter", mode="before")
    @classmethod
    def _normalize_quick_filter(cls, value):
        # The dashboard sends null or "all" for "no preset"
        if value in (None, "", "all"):
            return QuickFilter.NONE
        return value

    @field_validator("date_range_start", "date_range_end", mode="before")
    @classmethod
    def _blank_date_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def has_date_range(self) -> bool:
        return self.date_range_start is not None or self.date_range_end is not None


class MemberFilter(_DateRangeMixin):
    """Filter state of a Member viewer"""
    kind: Literal["member"] = "member"
    filter_type: MemberFilterType = MemberFilterType.MY
    status_filter: str = "all"
    due_date_filter: DueDateWindow = DueDateWindow.ALL

    def has_manager_overrides(self) -> bool:
        """True when a parent view populated the multi-select fields"""
        return bool(self.selected_statuses) or self.has_date_range() or self.quick_filter != QuickFilter.NONE

    def active_filter_count(self) -> int:
        return (
            (1 if self.selected_statuses else 0)
            + (1 if self.has_date_range() else 0)
            + (1 if self.quick_filter != QuickFilter.NONE else 0)
        )


class ManagerFilter(_DateRangeMixin):
    """Filter state of a ProjectManager / BusinessOwner / Admin viewer"""
    kind: Literal["manager"] = "manager"
    selected_member_ids: List[str] = Field(default_factory=list)

    def active_filter_count(self) -> int:
        return (
            (1 if self.selected_member_ids else 0)
            + (1 if self.selected_statuses else 0)
            + (1 if self.has_date_range() else 0)
            + (1 if self.quick_filter != QuickFilter.NONE else 0)
        )


FilterCriteria = Annotated[Union[MemberFilter, ManagerFilter], Field(discriminator="kind")]


class ViewerContext(BaseModel):
    """The current user's role and id"""
    role: str
    user_id: str

    @property
    def is_manager(self) -> bool:
        return self.role.lower() in MANAGER_ROLES

    @property
    def sees_all_project_tasks(self) -> bool:
        return self.role.lower() in PROJECT_WIDE_ROLES

    def default_filter(self) -> Union[MemberFilter, ManagerFilter]:
        return ManagerFilter() if self.is_manager else MemberFilter()
