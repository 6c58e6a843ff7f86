from fastapi import APIRouter
from app.api import health, tasks
from app.features.task_view import router as task_view_router

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health.router)
api_router.include_router(tasks.router)
api_router.include_router(task_view_router)
