"""Task domain model"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class TaskStatus(str, Enum):
    """Task status enum (synced with backend)"""
    NOT_STARTED = "NotStarted"
    TODO = "Todo"
    IN_PROGRESS = "InProgress"
    READY_TO_REVIEW = "ReadyToReview"
    RE_OPENED = "ReOpened"
    DONE = "Done"
    CANCELLED = "Cancelled"


# Statuses that never count as overdue
CLOSED_STATUSES = {TaskStatus.DONE.value, TaskStatus.CANCELLED.value}


class CamelModel(BaseModel):
    """Accepts the backend's camelCase JSON as well as snake_case field names"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class TaskUser(CamelModel):
    """User object embedded in a task response"""
    id: str
    full_name: Optional[str] = None
    email: Optional[str] = None


class TaskMilestone(CamelModel):
    """Milestone info embedded in a task response"""
    id: str
    project_id: Optional[str] = None
    name: Optional[str] = None
    due_date: Optional[str] = None
    description: Optional[str] = None


class TaskBase(CamelModel):
    """Base task fields for creation"""
    project_id: str
    title: str
    description: Optional[str] = None
    status: str = TaskStatus.TODO.value
    # Dates stay raw ISO-8601 strings; parsing happens where they are compared
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class TaskCreate(TaskBase):
    """Task creation model"""
    user_id: Optional[str] = None
    milestone_ids: List[str] = Field(default_factory=list)


class TaskUpdate(TaskBase):
    """Task update model - the backend replaces the whole record"""
    id: Optional[str] = None
    user_id: Optional[str] = None
    milestone_ids: List[str] = Field(default_factory=list)


class Task(TaskBase):
    """Complete task model from the task service"""
    id: str
    user_id: Optional[str] = None  # assignee
    reviewer_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    user: Optional[TaskUser] = None
    milestones: List[TaskMilestone] = Field(default_factory=list)

    @property
    def milestone_ids(self) -> List[str]:
        return [str(m.id) for m in self.milestones]
