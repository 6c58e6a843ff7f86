"""Domain models for the application"""
from .task import (
    CLOSED_STATUSES,
    CamelModel,
    Task,
    TaskBase,
    TaskCreate,
    TaskMilestone,
    TaskStatus,
    TaskUpdate,
    TaskUser,
)
from .member import MEMBER_ROLE, Member, MemberProfile, ProjectMember

__all__ = [
    'CLOSED_STATUSES', 'CamelModel',
    'Task', 'TaskBase', 'TaskCreate', 'TaskUpdate', 'TaskStatus',
    'TaskMilestone', 'TaskUser',
    'MEMBER_ROLE', 'Member', 'MemberProfile', 'ProjectMember',
]
