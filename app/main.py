import logging

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from contextlib import asynccontextmanager  # noqa: E402

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from app import config  # noqa: E402
from app.api.base import api_router  # noqa: E402
from app.infra.task_api import close_task_api_client  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_task_api_client()


app = FastAPI(
    title="Task View Backend API",
    description="Backend API for the project task list: filtering, grouping and pagination of project tasks",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include all API routes
app.include_router(api_router)


@app.get("/")
def read_root():
    return {
        "message": "Task View Backend API",
        "docs": "/docs",
        "version": "1.0.0"
    }
