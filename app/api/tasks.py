from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import List

from app.infra.task_api import get_repositories
from app.infra.task_api.repositories import RepositoryFactory, TaskApiError
from app.models.task import Task, TaskCreate, TaskUpdate

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


class TaskResponse(BaseModel):
    task: Task


class TaskListResponse(BaseModel):
    tasks: List[Task]
    count: int


class DeleteResponse(BaseModel):
    success: bool
    message: str


def _bad_gateway(e: TaskApiError) -> HTTPException:
    return HTTPException(status_code=502, detail=f"Task service error: {e.message}")


# CRUD Endpoints
@router.get("/by-milestone/{milestone_id}", response_model=TaskListResponse)
async def list_milestone_tasks(milestone_id: str, repositories: RepositoryFactory = Depends(get_repositories)):
    """List all tasks linked to a milestone"""
    try:
        tasks = await repositories.tasks.find_by_milestone(milestone_id)
    except TaskApiError as e:
        raise _bad_gateway(e)

    return {
        "tasks": tasks,
        "count": len(tasks)
    }


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, repositories: RepositoryFactory = Depends(get_repositories)):
    """Get a single task by ID"""
    try:
        task = await repositories.tasks.find_by_id(task_id)
    except TaskApiError as e:
        raise _bad_gateway(e)

    if not task:
        raise HTTPException(status_code=404, detail="Task not found")

    return {"task": task}


@router.post("", response_model=TaskResponse)
async def create_task(request: TaskCreate, repositories: RepositoryFactory = Depends(get_repositories)):
    """Create a new task"""
    try:
        task = await repositories.tasks.create(request)
    except TaskApiError as e:
        raise _bad_gateway(e)

    return {"task": task}


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(task_id: str, request: TaskUpdate, repositories: RepositoryFactory = Depends(get_repositories)):
    """Update an existing task"""
    data = request.model_copy(update={"id": task_id})
    try:
        task = await repositories.tasks.update(data)
    except TaskApiError as e:
        raise _bad_gateway(e)

    if not task:
        raise HTTPException(status_code=404, detail="Task not found")

    return {"task": task}


@router.delete("/{task_id}", response_model=DeleteResponse)
async def delete_task(task_id: str, repositories: RepositoryFactory = Depends(get_repositories)):
    """Delete a task"""
    try:
        success = await repositories.tasks.delete(task_id)
    except TaskApiError as e:
        raise _bad_gateway(e)

    if not success:
        raise HTTPException(status_code=404, detail="Task not found")

    return {"success": True, "message": "Task deleted successfully"}
