"""Request and response schemas for the task view API"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field

from app.models.member import Member
from app.models.task import TaskCreate, TaskUpdate

from .domain import FilterCriteria, GroupBy


class PaginationInfo(BaseModel):
    """Page position of one bucket ("page X of Y", "showing A-B of N")"""
    current_page: int
    total_pages: int
    total_items: int
    page_size: int
    start_index: int
    end_index: int
    can_go_previous: bool
    can_go_next: bool
    page_numbers: List[Union[int, str]] = Field(default_factory=list)
    info: str = ""


class TaskRow(BaseModel):
    """One rendered row of the task table"""
    index: int  # 1-based position within the whole bucket
    id: str
    title: str
    description: Optional[str] = None
    status: str
    status_label: str
    assignee_id: Optional[str] = None
    assignee_name: str
    start_date: str = ""
    end_date: str = ""
    overdue_days: int = 0
    milestone_ids: List[str] = Field(default_factory=list)


class TaskGroupPage(BaseModel):
    """A bucket with its current page of rows"""
    name: str
    pagination: PaginationInfo
    rows: List[TaskRow]


class TaskListView(BaseModel):
    """Everything the task table needs to render"""
    project_id: str
    group_by: GroupBy
    search_query: str = ""
    filter: FilterCriteria
    total_tasks: int
    filtered_count: int
    active_filter_count: int
    is_loading: bool = False
    error: Optional[str] = None
    member_options: List[Member] = Field(default_factory=list)
    groups: List[TaskGroupPage] = Field(default_factory=list)


class OpenTaskViewRequest(BaseModel):
    """Request model for opening a view session"""
    project_id: str
    role: str
    user_id: str
    group_by: GroupBy = GroupBy.NONE
    search_query: str = ""
    filter: Optional[FilterCriteria] = None


class OpenTaskViewResponse(BaseModel):
    view_id: str
    view: TaskListView


class UpdateTaskViewRequest(BaseModel):
    """Partial update of a view session's UI state"""
    search_query: Optional[str] = None
    group_by: Optional[GroupBy] = None
    filter: Optional[FilterCriteria] = None


class SetPageRequest(BaseModel):
    page: int = Field(..., ge=1)


class CreateViewTaskRequest(TaskCreate):
    """Task creation through a view (project comes from the session)"""
    project_id: Optional[str] = None


class UpdateViewTaskRequest(TaskUpdate):
    """Task update through a view (project and id come from the session/path)"""
    project_id: Optional[str] = None


class DeleteResponse(BaseModel):
    success: bool
    message: str
