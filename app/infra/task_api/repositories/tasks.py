"""Task repository"""
from typing import List

import httpx

from app import config
from app.models.task import Task, TaskCreate, TaskUpdate

from .base import BaseRepository, TaskApiError


class TaskRepository(BaseRepository[Task, TaskCreate, TaskUpdate]):
    """Repository for task operations"""

    def __init__(self, client: httpx.AsyncClient, page_size: int = config.TASK_API_PAGE_SIZE):
        super().__init__(client, "tasks", Task)
        self._page_size = page_size

    async def find_by_project(self, project_id: str) -> List[Task]:
        """Find every task in a project (all server pages)

        Args:
            project_id: Project to list tasks for
        """
        return await self._find_all_pages(f"/{self._resource}/by-project/{project_id}", self._page_size)

    async def find_by_user_and_project(self, user_id: str, project_id: str) -> List[Task]:
        """Find the tasks assigned to a user inside a project (all server pages)

        Args:
            user_id: Assignee ID
            project_id: Project ID
        """
        return await self._find_all_pages(
            f"/{self._resource}/by-user-project/{user_id}/{project_id}", self._page_size
        )

    async def find_by_milestone(self, milestone_id: str) -> List[Task]:
        """Find tasks linked to a milestone (endpoint is not paginated)"""
        data = await self._request("GET", f"/{self._resource}/by-milestone/{milestone_id}", empty_on_missing=True)
        if data is not None and not isinstance(data, list):
            raise TaskApiError("Unexpected listing payload")
        return self._to_models(data or [])
