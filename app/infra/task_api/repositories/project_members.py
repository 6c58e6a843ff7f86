"""Project member repository"""
from typing import List

import httpx

from app.models.member import Member, ProjectMember

from .base import BaseRepository, TaskApiError


class ProjectMemberRepository(BaseRepository[ProjectMember, ProjectMember, ProjectMember]):
    """Repository for project member lookups"""

    def __init__(self, client: httpx.AsyncClient):
        super().__init__(client, "projects", ProjectMember)

    async def find_by_project(self, project_id: str) -> List[Member]:
        """Find all members of a project, flattened for display

        Envelopes without a nested member are dropped.
        """
        data = await self._request("GET", f"/{self._resource}/project-member/{project_id}", empty_on_missing=True)
        if data is not None and not isinstance(data, list):
            raise TaskApiError("Unexpected member listing payload")
        members = []
        for project_member in self._to_models(data or []):
            member = Member.from_project_member(project_member)
            if member is not None:
                members.append(member)
        return members
