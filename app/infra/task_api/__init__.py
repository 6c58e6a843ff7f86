"""Task service infrastructure module"""
from .client import close_task_api_client, get_repositories, get_task_api_client, reset_task_api_client

__all__ = ['get_task_api_client', 'get_repositories', 'close_task_api_client', 'reset_task_api_client']
