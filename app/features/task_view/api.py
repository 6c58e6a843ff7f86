"""Task view API endpoints"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.infra.task_api import get_repositories
from app.infra.task_api.repositories import RepositoryFactory, TaskApiError
from app.models.task import TaskCreate, TaskUpdate
from app.features.task_view.domain import ViewerContext
from app.features.task_view.schemas import (
    CreateViewTaskRequest,
    DeleteResponse,
    OpenTaskViewRequest,
    OpenTaskViewResponse,
    SetPageRequest,
    TaskListView,
    UpdateTaskViewRequest,
    UpdateViewTaskRequest,
)
from app.features.task_view.service import TaskViewSession, TaskViewStore, get_task_view_store

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/task-views", tags=["task-views"])


def _get_session(view_id: str, store: TaskViewStore) -> TaskViewSession:
    session = store.get(view_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Task view not found")
    return session


def _upstream_error(action: str, e: TaskApiError) -> HTTPException:
    logger.error(f"Failed to {action}: {e.message}")
    return HTTPException(status_code=502, detail=f"Failed to {action}: {e.message}")


@router.post("", response_model=OpenTaskViewResponse)
async def open_task_view(
    request: OpenTaskViewRequest,
    store: TaskViewStore = Depends(get_task_view_store),
    repositories: RepositoryFactory = Depends(get_repositories),
):
    """
    Open a task view for a project and viewer, and load its tasks.

    Managers (ProjectManager, BusinessOwner, Admin) see every project task;
    other roles see only the tasks assigned to them.
    """
    viewer = ViewerContext(role=request.role, user_id=request.user_id)
    try:
        session = TaskViewSession(
            project_id=request.project_id,
            viewer=viewer,
            repositories=repositories,
            group_by=request.group_by,
            search_query=request.search_query,
            criteria=request.filter,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    await session.refresh()
    store.add(session)
    logger.info(f"Opened task view {session.id} for project {request.project_id} ({request.role})")

    return {"view_id": session.id, "view": session.render()}


@router.get("/{view_id}", response_model=TaskListView)
async def get_task_view(view_id: str, store: TaskViewStore = Depends(get_task_view_store)):
    """Render the current state of a task view"""
    return _get_session(view_id, store).render()


@router.patch("/{view_id}", response_model=TaskListView)
async def update_task_view(
    view_id: str,
    request: UpdateTaskViewRequest,
    store: TaskViewStore = Depends(get_task_view_store),
):
    """Update search query, grouping and/or filters of a task view"""
    session = _get_session(view_id, store)

    if request.search_query is not None:
        session.set_search(request.search_query)
    if request.group_by is not None:
        session.set_group_by(request.group_by)
    if request.filter is not None:
        try:
            session.set_filter(request.filter)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))

    return session.render()


@router.put("/{view_id}/pages/{bucket}", response_model=TaskListView)
async def set_task_view_page(
    view_id: str,
    bucket: str,
    request: SetPageRequest,
    store: TaskViewStore = Depends(get_task_view_store),
):
    """Move one bucket to another page"""
    session = _get_session(view_id, store)
    session.set_page(bucket, request.page)
    return session.render()


@router.post("/{view_id}/refresh", response_model=TaskListView)
async def refresh_task_view(view_id: str, store: TaskViewStore = Depends(get_task_view_store)):
    """Re-fetch tasks and members"""
    session = _get_session(view_id, store)
    await session.refresh()
    return session.render()


@router.delete("/{view_id}/filters", response_model=TaskListView)
async def clear_task_view_filters(view_id: str, store: TaskViewStore = Depends(get_task_view_store)):
    """Clear the multi-select filters and quick preset"""
    session = _get_session(view_id, store)
    session.clear_filters()
    return session.render()


@router.delete("/{view_id}", response_model=DeleteResponse)
async def close_task_view(view_id: str, store: TaskViewStore = Depends(get_task_view_store)):
    """Close a task view"""
    if not store.remove(view_id):
        raise HTTPException(status_code=404, detail="Task view not found")
    return {"success": True, "message": "Task view closed"}


# Mutations re-fetch the view on success

@router.post("/{view_id}/tasks", response_model=TaskListView)
async def create_view_task(
    view_id: str,
    request: CreateViewTaskRequest,
    store: TaskViewStore = Depends(get_task_view_store),
):
    """Create a task in the view's project"""
    session = _get_session(view_id, store)
    data = TaskCreate(**request.model_dump(exclude={"project_id"}), project_id=session.project_id)

    try:
        await session.create_task(data)
    except TaskApiError as e:
        raise _upstream_error("create task", e)

    return session.render()


@router.put("/{view_id}/tasks/{task_id}", response_model=TaskListView)
async def update_view_task(
    view_id: str,
    task_id: str,
    request: UpdateViewTaskRequest,
    store: TaskViewStore = Depends(get_task_view_store),
):
    """Update a task of the view's project"""
    session = _get_session(view_id, store)
    data = TaskUpdate(
        **request.model_dump(exclude={"project_id", "id"}),
        id=task_id,
        project_id=session.project_id,
    )

    try:
        task = await session.update_task(data)
    except TaskApiError as e:
        raise _upstream_error("update task", e)

    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")

    return session.render()


@router.delete("/{view_id}/tasks/{task_id}", response_model=TaskListView)
async def delete_view_task(
    view_id: str,
    task_id: str,
    store: TaskViewStore = Depends(get_task_view_store),
):
    """Delete a task of the view's project"""
    session = _get_session(view_id, store)

    try:
        deleted = await session.delete_task(task_id)
    except TaskApiError as e:
        raise _upstream_error("delete task", e)

    if not deleted:
        raise HTTPException(status_code=404, detail="Task not found")

    return session.render()
