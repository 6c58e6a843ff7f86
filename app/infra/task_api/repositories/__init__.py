"""Repository factory and exports"""
import httpx

from .base import TaskApiError
from .tasks import TaskRepository
from .project_members import ProjectMemberRepository


class RepositoryFactory:
    """Factory for creating repository instances"""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client
        self._tasks: TaskRepository = None
        self._project_members: ProjectMemberRepository = None

    @property
    def tasks(self) -> TaskRepository:
        """Get task repository"""
        if self._tasks is None:
            self._tasks = TaskRepository(self._client)
        return self._tasks

    @property
    def project_members(self) -> ProjectMemberRepository:
        """Get project member repository"""
        if self._project_members is None:
            self._project_members = ProjectMemberRepository(self._client)
        return self._project_members


__all__ = [
    'RepositoryFactory',
    'TaskApiError',
    'TaskRepository',
    'ProjectMemberRepository',
]
