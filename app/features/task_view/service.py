"""
Task View Service

Holds the UI-session state of one task table (search, filters, grouping,
per-bucket pages) together with the last fetched task and member snapshots:
- Fetching tasks/members for the viewer's role, discarding stale responses
- Updating view state (grouping changes reset every page cursor)
- Task mutations followed by a full re-fetch
"""

import asyncio
import logging
import time
import uuid
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from app import config
from app.infra.task_api.repositories import RepositoryFactory, TaskApiError
from app.models.member import Member
from app.models.task import Task, TaskCreate, TaskUpdate

from .domain import GroupBy, ManagerFilter, MemberFilter, QuickFilter, ViewerContext
from .pagination import PageCursors
from .pipeline import build_task_list_view
from .schemas import TaskListView

logger = logging.getLogger(__name__)

FETCH_ERRORS = (TaskApiError, ValidationError)


class TaskViewSession:
    """State of one task list view"""

    def __init__(
        self,
        project_id: str,
        viewer: ViewerContext,
        repositories: RepositoryFactory,
        group_by: GroupBy = GroupBy.NONE,
        search_query: str = "",
        criteria: Optional[Union[MemberFilter, ManagerFilter]] = None,
    ):
        self.id = uuid.uuid4().hex
        self.project_id = project_id
        self.viewer = viewer
        self.repositories = repositories
        self.group_by = group_by
        self.search_query = search_query
        self.criteria = viewer.default_filter()
        if criteria is not None:
            self.set_filter(criteria)
        self.cursors = PageCursors()

        self.tasks: List[Task] = []
        self.members: List[Member] = []
        self.is_loading = False
        self.error: Optional[str] = None

        # Increases with every fetch; only the latest fetch may write results
        self._fetch_token = 0

    # ---- fetching -------------------------------------------------------

    async def refresh(self) -> bool:
        """
        Re-fetch members and tasks.

        Returns:
            True if the results were applied, False if a newer refresh was
            started while this one was in flight (its results are dropped)
        """
        self._fetch_token += 1
        token = self._fetch_token
        self.is_loading = True

        try:
            (members, members_error), (tasks, tasks_error) = await asyncio.gather(
                self._fetch_members(), self._fetch_tasks()
            )

            if token != self._fetch_token:
                logger.info(f"Discarding stale fetch {token} for view {self.id} (latest is {self._fetch_token})")
                return False

            self.members = members
            self.tasks = tasks
            self.error = tasks_error or members_error
            return True
        finally:
            if token == self._fetch_token:
                self.is_loading = False

    async def _fetch_members(self) -> Tuple[List[Member], Optional[str]]:
        try:
            return await self.repositories.project_members.find_by_project(self.project_id), None
        except FETCH_ERRORS as e:
            logger.error(f"Failed to fetch members for project {self.project_id}: {e}")
            return [], "Failed to fetch project members"

    async def _fetch_tasks(self) -> Tuple[List[Task], Optional[str]]:
        """ProjectManager and BusinessOwner see every project task, other roles only their own"""
        try:
            if self.viewer.sees_all_project_tasks:
                tasks = await self.repositories.tasks.find_by_project(self.project_id)
            else:
                tasks = await self.repositories.tasks.find_by_user_and_project(self.viewer.user_id, self.project_id)
            return tasks, None
        except FETCH_ERRORS as e:
            logger.error(f"Failed to fetch tasks for project {self.project_id}: {e}")
            return [], "Failed to fetch tasks"

    # ---- view state -----------------------------------------------------

    def set_search(self, query: str) -> None:
        self.search_query = query or ""

    def set_filter(self, criteria: Union[MemberFilter, ManagerFilter]) -> None:
        """Replace the filter state; the variant must match the viewer's role"""
        if self.viewer.is_manager and not isinstance(criteria, ManagerFilter):
            raise ValueError("Manager views take manager filters")
        if not self.viewer.is_manager and not isinstance(criteria, MemberFilter):
            raise ValueError("Member views take member filters")
        self.criteria = criteria

    def clear_filters(self) -> None:
        """Drop the multi-select filters and quick preset"""
        if isinstance(self.criteria, ManagerFilter):
            self.criteria = ManagerFilter()
        else:
            self.criteria = self.criteria.model_copy(update={
                "selected_statuses": [],
                "date_range_start": None,
                "date_range_end": None,
                "quick_filter": QuickFilter.NONE,
            })

    def set_group_by(self, group_by: GroupBy) -> None:
        """Change grouping; a different mode invalidates all page cursors"""
        if group_by != self.group_by:
            self.cursors.reset()
        self.group_by = group_by

    def set_page(self, bucket: str, page: int) -> None:
        self.cursors.set(bucket, page)

    def render(self, today: Optional[date] = None) -> TaskListView:
        return build_task_list_view(
            project_id=self.project_id,
            tasks=self.tasks,
            members=self.members,
            viewer=self.viewer,
            criteria=self.criteria,
            group_by=self.group_by,
            cursors=self.cursors,
            search_query=self.search_query,
            today=today,
            is_loading=self.is_loading,
            error=self.error,
        )

    # ---- mutations ------------------------------------------------------

    async def create_task(self, data: TaskCreate) -> Task:
        task = await self.repositories.tasks.create(data)
        logger.info(f"Created task {task.id} in project {self.project_id}")
        await self.refresh()
        return task

    async def update_task(self, data: TaskUpdate) -> Optional[Task]:
        task = await self.repositories.tasks.update(data)
        if task is None:
            return None
        logger.info(f"Updated task {task.id} in project {self.project_id}")
        await self.refresh()
        return task

    async def delete_task(self, task_id: str) -> bool:
        deleted = await self.repositories.tasks.delete(task_id)
        if deleted:
            logger.info(f"Deleted task {task_id} from project {self.project_id}")
            await self.refresh()
        return deleted


class TaskViewStore:
    """
    In-memory registry of open view sessions.

    Sessions not accessed for ``ttl_seconds`` are evicted on the next
    add/get/len; a ttl of 0 or less keeps sessions until removed.
    """

    def __init__(
        self,
        ttl_seconds: float = config.TASK_VIEW_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._sessions: Dict[str, TaskViewSession] = {}
        self._last_access: Dict[str, float] = {}
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def _evict_expired(self) -> None:
        if self.ttl_seconds <= 0:
            return
        now = self._clock()
        expired = [vid for vid, seen in self._last_access.items() if now - seen >= self.ttl_seconds]
        for view_id in expired:
            self._sessions.pop(view_id, None)
            self._last_access.pop(view_id, None)
        if expired:
            logger.info(f"Evicted {len(expired)} idle task view(s)")

    def add(self, session: TaskViewSession) -> TaskViewSession:
        self._evict_expired()
        self._sessions[session.id] = session
        self._last_access[session.id] = self._clock()
        return session

    def get(self, view_id: str) -> Optional[TaskViewSession]:
        self._evict_expired()
        session = self._sessions.get(view_id)
        if session is not None:
            self._last_access[view_id] = self._clock()
        return session

    def remove(self, view_id: str) -> bool:
        self._last_access.pop(view_id, None)
        return self._sessions.pop(view_id, None) is not None

    def clear(self) -> None:
        self._sessions.clear()
        self._last_access.clear()

    def __len__(self) -> int:
        self._evict_expired()
        return len(self._sessions)


task_view_store = TaskViewStore()


def get_task_view_store() -> TaskViewStore:
    return task_view_store
