"""Health check and monitoring endpoints"""

from fastapi import APIRouter, Depends

from app import config
from app.features.task_view.service import TaskViewStore, get_task_view_store

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/views")
async def get_view_stats(store: TaskViewStore = Depends(get_task_view_store)):
    """
    Get task view session statistics.

    Returns the number of open views and the upstream task service settings.
    """
    return {
        "open_views": len(store),
        "task_api_url": config.TASK_API_URL,
        "task_api_page_size": config.TASK_API_PAGE_SIZE,
        "view_page_size": config.TASK_VIEW_PAGE_SIZE,
        "view_ttl_seconds": store.ttl_seconds,
    }


@router.get("/")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": "task-view-backend",
    }
