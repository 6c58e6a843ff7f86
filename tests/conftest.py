# tests/conftest.py

from __future__ import annotations

import pytest

from app.features.task_view.domain import ViewerContext
from app.features.task_view.service import task_view_store
from app.models.member import Member

from .fakes import PROJECT_ID, FakeTaskService, build_task, member_json, task_json


@pytest.fixture()
def make_task():
    return build_task


@pytest.fixture()
def manager() -> ViewerContext:
    return ViewerContext(role="ProjectManager", user_id="PM1")


@pytest.fixture()
def member_viewer() -> ViewerContext:
    return ViewerContext(role="Member", user_id="U1")


@pytest.fixture()
def members() -> list[Member]:
    return [
        Member(id="U1", name="Alice", email="alice@example.com", role="Member"),
        Member(id="U2", name="Bob", email="bob@example.com", role="Member"),
        Member(id="PM1", name="Paula", email="paula@example.com", role="ProjectManager"),
    ]


@pytest.fixture()
def task_service() -> FakeTaskService:
    """
    Backend with four tasks in P1, one in P2, and P1 members.

    As of 2024-01-01: T1 is overdue, T2 is ready to review and due in 4 days,
    T3 has no dates, T4 is Done with a past end date.
    """
    return FakeTaskService(
        tasks=[
            task_json("T1", title="Write report", userId="U1", status="InProgress", endDate="2023-12-20T00:00:00Z"),
            task_json("T2", title="Review design", userId="U2", status="ReadyToReview", endDate="2024-01-05T00:00:00Z"),
            task_json("T3", title="Plan sprint", status="Todo", milestones=[{"id": "M1"}]),
            task_json("T4", title="Deploy", userId="U1", status="Done", endDate="2023-11-01T00:00:00Z",
                      milestones=[{"id": "M1"}, {"id": "M2"}]),
            task_json("X1", projectId="P2", title="Other project", userId="U1"),
        ],
        members=[
            member_json("U1", "Alice"),
            member_json("U2", None, email="bob@example.com"),
            member_json("PM1", "Paula", role="ProjectManager"),
            {"id": "PM-orphan", "projectId": PROJECT_ID, "member": None},
        ],
    )


@pytest.fixture(autouse=True)
def _clear_task_views():
    task_view_store.clear()
    yield
    task_view_store.clear()
