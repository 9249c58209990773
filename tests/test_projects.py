# tests/test_projects.py

from __future__ import annotations

import pytest

from project.models import Project
from task.models import Status, Task, TaskDependency

from .helpers import aware, data, error

pytestmark = pytest.mark.django_db


def test_create_project(auth_client, user) -> None:
    response = auth_client.post(
        "/api/projects",
        {
            "name": "Mobile app",
            "description": "iOS and Android",
            "startDate": "2024-03-01T00:00:00Z",
            "endDate": "2024-06-30T00:00:00Z",
        },
        format="json",
    )

    assert response.status_code == 201
    project = data(response)["project"]
    assert project["name"] == "Mobile app"
    assert project["status"] == "active"
    assert project["ownerId"] == user.id
    assert project["taskStats"] == {"total": 0, "completed": 0, "inProgress": 0, "todo": 0}


@pytest.mark.parametrize(
    "payload, message",
    [
        ({}, "Project name is required"),
        ({"name": ""}, "Project name is required"),
        ({"name": "n" * 101}, "Project name cannot exceed 100 characters"),
        ({"name": "ok", "description": "d" * 1001}, "Project description cannot exceed 1000 characters"),
        ({"name": "ok", "status": "paused"}, "Invalid project status"),
        ({"name": "ok", "startDate": "yesterday"}, "Start date format is invalid"),
        (
            {"name": "ok", "startDate": "2024-05-01T00:00:00Z", "endDate": "2024-04-01T00:00:00Z"},
            "Start date cannot be later than end date",
        ),
    ],
)
def test_create_project_validation(auth_client, payload, message) -> None:
    response = auth_client.post("/api/projects", payload, format="json")

    assert response.status_code == 400
    assert error(response)["message"] == message


def test_list_is_paginated_and_scoped_to_owner(auth_client, make_project, other_user) -> None:
    for index in range(12):
        make_project(name=f"Project {index}")
    make_project(owner=other_user, name="Not mine")

    response = auth_client.get("/api/projects", {"page": 2, "limit": 5})

    assert response.status_code == 200
    body = data(response)
    assert len(body["projects"]) == 5
    assert body["pagination"] == {"page": 2, "limit": 5, "total": 12, "pages": 3}
    assert all(p["name"] != "Not mine" for p in body["projects"])


def test_list_defaults_to_ten_per_page(auth_client, make_project) -> None:
    for index in range(11):
        make_project(name=f"Project {index}")

    body = data(auth_client.get("/api/projects"))

    assert len(body["projects"]) == 10
    assert body["pagination"]["pages"] == 2


def test_list_filters_by_status_and_search(auth_client, make_project) -> None:
    make_project(name="Alpha", status="active")
    make_project(name="Beta", status="archived", description="legacy billing")
    make_project(name="Gamma", status="completed")

    archived = data(auth_client.get("/api/projects", {"status": "archived"}))["projects"]
    assert [p["name"] for p in archived] == ["Beta"]

    everything = data(auth_client.get("/api/projects", {"status": "all"}))["projects"]
    assert len(everything) == 3

    found = data(auth_client.get("/api/projects", {"search": "billing"}))["projects"]
    assert [p["name"] for p in found] == ["Beta"]


def test_list_carries_task_stats(auth_client, project, make_task) -> None:
    make_task(status=Status.COMPLETED, progress=100)
    make_task(status=Status.IN_PROGRESS)
    make_task()

    listed = data(auth_client.get("/api/projects"))["projects"][0]

    assert listed["taskStats"] == {"total": 3, "completed": 1, "inProgress": 1, "todo": 1}


def test_retrieve_includes_tasks(auth_client, project, make_task) -> None:
    make_task(title="First")
    make_task(title="Second")

    response = auth_client.get(f"/api/projects/{project.id}")

    assert response.status_code == 200
    detail = data(response)["project"]
    assert {t["title"] for t in detail["tasks"]} == {"First", "Second"}
    assert detail["tasks"][0]["project"] == {"id": project.id, "name": project.name}


def test_other_users_project_is_not_found(other_client, project) -> None:
    for response in (
        other_client.get(f"/api/projects/{project.id}"),
        other_client.put(f"/api/projects/{project.id}", {"name": "Hijack"}, format="json"),
        other_client.delete(f"/api/projects/{project.id}"),
        other_client.get(f"/api/projects/{project.id}/stats"),
    ):
        assert response.status_code == 404
        assert error(response)["message"] == "Project not found"

    assert Project.objects.filter(pk=project.id, name="Website relaunch").exists()


def test_update_keeps_absent_fields_and_clears_null_ones(auth_client, make_project) -> None:
    project = make_project(description="Old text", start_date=aware(2024, 1, 1))

    response = auth_client.put(f"/api/projects/{project.id}", {"description": None, "status": "completed"}, format="json")

    assert response.status_code == 200
    updated = data(response)["project"]
    assert updated["name"] == "Website relaunch"
    assert updated["description"] is None
    assert updated["status"] == "completed"
    assert updated["startDate"] is not None


def test_update_checks_dates_against_stored_values(auth_client, make_project) -> None:
    project = make_project(start_date=aware(2024, 1, 10))

    response = auth_client.put(f"/api/projects/{project.id}", {"endDate": "2024-01-01T00:00:00Z"}, format="json")

    assert response.status_code == 400
    assert error(response)["message"] == "Start date cannot be later than end date"


def test_delete_cascades_to_tasks_and_dependencies(auth_client, project, make_task) -> None:
    first = make_task(title="First")
    second = make_task(title="Second")
    TaskDependency.objects.create(task=second, depends_on_task=first)

    response = auth_client.delete(f"/api/projects/{project.id}")

    assert response.status_code == 200
    assert not Project.objects.filter(pk=project.id).exists()
    assert not Task.objects.filter(pk__in=[first.id, second.id]).exists()
    assert TaskDependency.objects.count() == 0


def test_projects_require_authentication(api_client) -> None:
    response = api_client.get("/api/projects")

    assert response.status_code == 401
    assert error(response)["message"] == "Authentication credentials were not provided."
