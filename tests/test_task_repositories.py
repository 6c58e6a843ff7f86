# tests/test_task_repositories.py

from __future__ import annotations

import httpx
import pytest

from app.infra.task_api.repositories import (
    ProjectMemberRepository,
    RepositoryFactory,
    TaskApiError,
    TaskRepository,
)
from app.models.task import TaskCreate, TaskUpdate

from .fakes import BASE_URL, PROJECT_ID, FakeTaskService, task_json


@pytest.mark.asyncio
async def test_find_by_project_drains_every_page() -> None:
    service = FakeTaskService(tasks=[task_json(f"T{i}") for i in range(12)])

    async with service.client() as client:
        tasks = await TaskRepository(client, page_size=5).find_by_project(PROJECT_ID)

    assert [t.id for t in tasks] == [f"T{i}" for i in range(12)]
    page_indexes = [r.url.params["pageIndex"] for r in service.requests]
    assert page_indexes == ["0", "1", "2"]
    assert all(r.url.params["pageSize"] == "5" for r in service.requests)


@pytest.mark.asyncio
async def test_find_by_project_stops_at_total_items() -> None:
    service = FakeTaskService(tasks=[task_json(f"T{i}") for i in range(10)])

    async with service.client() as client:
        tasks = await TaskRepository(client, page_size=5).find_by_project(PROJECT_ID)

    assert len(tasks) == 10
    assert len(service.requests) == 2


@pytest.mark.asyncio
async def test_find_by_project_parses_camel_case_fields(task_service) -> None:
    async with task_service.client() as client:
        tasks = await TaskRepository(client).find_by_project(PROJECT_ID)

    assert [t.id for t in tasks] == ["T1", "T2", "T3", "T4"]
    t1 = tasks[0]
    assert t1.user_id == "U1"
    assert t1.status == "InProgress"
    assert t1.end_date == "2023-12-20T00:00:00Z"
    assert tasks[3].milestone_ids == ["M1", "M2"]
    assert task_service.paths() == ["/api/tasks/by-project/P1"]


@pytest.mark.asyncio
async def test_not_found_listing_is_empty(task_service) -> None:
    async with task_service.client() as client:
        tasks = await TaskRepository(client).find_by_project("P-missing")
        by_milestone = await TaskRepository(client).find_by_milestone("M-missing")

    assert tasks == []
    assert by_milestone == []


@pytest.mark.asyncio
async def test_find_by_user_and_project(task_service) -> None:
    async with task_service.client() as client:
        tasks = await TaskRepository(client).find_by_user_and_project("U1", PROJECT_ID)

    assert [t.id for t in tasks] == ["T1", "T4"]
    assert task_service.paths() == ["/api/tasks/by-user-project/U1/P1"]


@pytest.mark.asyncio
async def test_find_by_milestone(task_service) -> None:
    async with task_service.client() as client:
        tasks = await TaskRepository(client).find_by_milestone("M1")

    assert [t.id for t in tasks] == ["T3", "T4"]


@pytest.mark.asyncio
async def test_upstream_failure_raises_task_api_error(task_service) -> None:
    task_service.fail_with = 503

    async with task_service.client() as client:
        with pytest.raises(TaskApiError) as exc_info:
            await TaskRepository(client).find_by_project(PROJECT_ID)

    assert exc_info.value.status_code == 503
    assert exc_info.value.message == "Upstream is down"


@pytest.mark.asyncio
async def test_unsuccessful_envelope_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": False, "data": None, "message": "Invalid project"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL) as client:
        with pytest.raises(TaskApiError, match="Invalid project"):
            await TaskRepository(client).find_by_project(PROJECT_ID)


@pytest.mark.asyncio
async def test_transport_error_raises_task_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL) as client:
        with pytest.raises(TaskApiError, match="unreachable"):
            await TaskRepository(client).find_by_id("T1")


@pytest.mark.asyncio
async def test_project_members_are_flattened(task_service) -> None:
    async with task_service.client() as client:
        members = await ProjectMemberRepository(client).find_by_project(PROJECT_ID)

    assert [(m.id, m.name, m.role) for m in members] == [
        ("U1", "Alice", "Member"),
        ("U2", "bob@example.com", "Member"),
        ("PM1", "Paula", "ProjectManager"),
    ]
    assert task_service.paths() == ["/api/projects/project-member/P1"]


@pytest.mark.asyncio
async def test_project_without_members_is_empty(task_service) -> None:
    async with task_service.client() as client:
        members = await ProjectMemberRepository(client).find_by_project("P-missing")

    assert members == []


@pytest.mark.asyncio
async def test_task_crud_round_trip(task_service) -> None:
    async with task_service.client() as client:
        repos = RepositoryFactory(client)

        created = await repos.tasks.create(
            TaskCreate(project_id=PROJECT_ID, title="New task", user_id="U2", milestone_ids=["M1"])
        )
        assert created.id == "T1001"
        assert created.milestone_ids == ["M1"]

        fetched = await repos.tasks.find_by_id(created.id)
        assert fetched is not None and fetched.title == "New task"

        updated = await repos.tasks.update(
            TaskUpdate(id=created.id, project_id=PROJECT_ID, title="Renamed", status="Done")
        )
        assert updated is not None
        assert (updated.title, updated.status) == ("Renamed", "Done")

        assert await repos.tasks.delete(created.id) is True
        assert await repos.tasks.find_by_id(created.id) is None

    post = task_service.requests[0]
    assert post.method == "POST"
    assert b'"projectId":"P1"' in post.content.replace(b" ", b"")


@pytest.mark.asyncio
async def test_missing_task_update_and_delete(task_service) -> None:
    async with task_service.client() as client:
        repo = TaskRepository(client)

        assert await repo.update(TaskUpdate(id="nope", project_id=PROJECT_ID, title="x")) is None
        assert await repo.delete("nope") is False


def test_repository_factory_reuses_instances() -> None:
    client = httpx.AsyncClient(base_url=BASE_URL)
    repos = RepositoryFactory(client)

    assert repos.tasks is repos.tasks
    assert repos.project_members is repos.project_members


def test_task_api_client_is_a_singleton(monkeypatch) -> None:
    from app import config
    from app.infra.task_api import get_task_api_client, reset_task_api_client

    monkeypatch.setattr(config, "TASK_API_URL", BASE_URL)
    monkeypatch.setattr(config, "TASK_API_TOKEN", "secret")
    reset_task_api_client()
    try:
        client = get_task_api_client()
        assert get_task_api_client() is client
        assert client.headers["Authorization"] == "Bearer secret"
        assert str(client.base_url).startswith(BASE_URL)
    finally:
        reset_task_api_client()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "data",
    [
        [{"id": "T1", "projectId": PROJECT_ID, "title": "Bare"}],
        {"items": {"id": "T1"}, "totalItems": 1},
        "tasks",
    ],
)
async def test_unexpected_listing_payload_raises_task_api_error(task_service, data) -> None:
    task_service.canned["tasks/by-project/P1"] = data

    async with task_service.client() as client:
        with pytest.raises(TaskApiError, match="Unexpected listing payload"):
            await TaskRepository(client).find_by_project(PROJECT_ID)


@pytest.mark.asyncio
async def test_unexpected_member_payload_raises_task_api_error(task_service) -> None:
    task_service.canned["projects/project-member/P1"] = {"items": []}

    async with task_service.client() as client:
        with pytest.raises(TaskApiError):
            await ProjectMemberRepository(client).find_by_project(PROJECT_ID)
