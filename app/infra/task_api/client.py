"""Task service HTTP client singleton"""
from typing import Optional

import httpx

from app import config

from .repositories import RepositoryFactory

_task_api_client: Optional[httpx.AsyncClient] = None


def get_task_api_client() -> httpx.AsyncClient:
    """Get or create the task service client singleton"""
    global _task_api_client

    if _task_api_client is None:
        if not config.TASK_API_URL:
            raise ValueError("TASK_API_URL must be set")

        headers = {"Content-Type": "application/json"}
        if config.TASK_API_TOKEN:
            headers["Authorization"] = f"Bearer {config.TASK_API_TOKEN}"

        _task_api_client = httpx.AsyncClient(
            base_url=config.TASK_API_URL,
            headers=headers,
            timeout=config.TASK_API_TIMEOUT,
        )

    return _task_api_client


async def close_task_api_client():
    """Close the shared client (called on application shutdown)"""
    global _task_api_client
    if _task_api_client is not None:
        await _task_api_client.aclose()
    _task_api_client = None


def reset_task_api_client():
    """Reset the client singleton (useful for testing)"""
    global _task_api_client
    _task_api_client = None


def get_repositories() -> RepositoryFactory:
    """FastAPI dependency: repositories bound to the shared client"""
    return RepositoryFactory(get_task_api_client())
