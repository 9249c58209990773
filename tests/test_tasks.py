# tests/test_tasks.py

from __future__ import annotations

import pytest

from task.models import Priority, Status, Task

from .helpers import aware, data, error

pytestmark = pytest.mark.django_db


def test_create_task_with_defaults(auth_client, project) -> None:
    response = auth_client.post("/api/tasks", {"title": "Design logo", "projectId": project.id}, format="json")

    assert response.status_code == 201
    task = data(response)["task"]
    assert task["status"] == "todo"
    assert task["priority"] == "medium"
    assert task["progress"] == 0
    assert task["project"] == {"id": project.id, "name": project.name}
    assert task["assignee"] is None
    assert task["dependencies"] == []
    assert task["fileCount"] == 0


def test_create_completed_task_forces_full_progress(auth_client, project) -> None:
    response = auth_client.post(
        "/api/tasks",
        {"title": "Done already", "projectId": project.id, "status": "completed", "progress": 10},
        format="json",
    )

    assert response.status_code == 201
    assert data(response)["task"]["progress"] == 100


def test_create_task_with_assignee_and_parent(auth_client, project, make_task, other_user) -> None:
    parent = make_task(title="Epic")

    response = auth_client.post(
        "/api/tasks",
        {"title": "Story", "projectId": project.id, "assigneeId": other_user.id, "parentTaskId": parent.id},
        format="json",
    )

    assert response.status_code == 201
    task = data(response)["task"]
    assert task["assignee"] == {"id": other_user.id, "username": "bob"}
    assert task["parentTaskId"] == parent.id


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"title": ""}, "Task title is required"),
        ({"title": "t" * 201}, "Task title cannot exceed 200 characters"),
        ({"title": "ok", "status": "blocked"}, "Invalid task status"),
        ({"title": "ok", "priority": "critical"}, "Invalid task priority"),
        ({"title": "ok", "progress": 101}, "Progress must be between 0 and 100"),
        ({"title": "ok", "progress": -1}, "Progress must be between 0 and 100"),
        ({"title": "ok", "assigneeId": 999999}, "Assignee does not exist"),
        ({"title": "ok", "parentTaskId": 999999}, "Parent task not found or access denied"),
        ({"title": "ok", "endDate": "not a date"}, "End date format is invalid"),
        (
            {"title": "ok", "startDate": "2024-02-01T00:00:00Z", "endDate": "2024-01-01T00:00:00Z"},
            "Start date cannot be later than end date",
        ),
    ],
)
def test_create_task_validation(auth_client, project, payload, message) -> None:
    response = auth_client.post("/api/tasks", {"projectId": project.id, **payload}, format="json")

    assert response.status_code == 400
    assert error(response)["message"] == message


def test_create_task_needs_an_owned_project(auth_client, other_client, project) -> None:
    missing = auth_client.post("/api/tasks", {"title": "Orphan"}, format="json")
    assert missing.status_code == 400
    assert error(missing)["message"] == "Project ID is required"

    foreign = other_client.post("/api/tasks", {"title": "Sneaky", "projectId": project.id}, format="json")
    assert foreign.status_code == 400
    assert error(foreign)["message"] == "Project not found or access denied"


def test_parent_task_must_be_owned(other_client, make_project, other_user, make_task) -> None:
    foreign_parent = make_task(title="Alice's task")
    bobs_project = make_project(owner=other_user, name="Bob's project")

    response = other_client.post(
        "/api/tasks",
        {"title": "Child", "projectId": bobs_project.id, "parentTaskId": foreign_parent.id},
        format="json",
    )

    assert response.status_code == 400
    assert error(response)["message"] == "Parent task not found or access denied"


def test_retrieve_detail_shape(auth_client, user, make_task) -> None:
    parent = make_task(title="Epic", assignee=user)
    make_task(title="Child", parent_task=parent)

    response = auth_client.get(f"/api/tasks/{parent.id}")

    assert response.status_code == 200
    task = data(response)["task"]
    assert task["assignee"]["email"] == "alice@example.com"
    assert [s["title"] for s in task["subtasks"]] == ["Child"]
    assert task["files"] == []


def test_other_users_task_is_not_found(other_client, make_task) -> None:
    task = make_task()

    for response in (
        other_client.get(f"/api/tasks/{task.id}"),
        other_client.put(f"/api/tasks/{task.id}", {"title": "Mine now"}, format="json"),
        other_client.patch(f"/api/tasks/{task.id}/progress", {"progress": 50}, format="json"),
        other_client.delete(f"/api/tasks/{task.id}"),
    ):
        assert response.status_code == 404
        assert error(response)["message"] == "Task not found"


def test_update_has_patch_semantics(auth_client, user, make_task) -> None:
    task = make_task(description="Notes", assignee=user, start_date=aware(2024, 1, 1), priority=Priority.HIGH)

    response = auth_client.put(
        f"/api/tasks/{task.id}",
        {"description": None, "assigneeId": None, "status": "in_progress"},
        format="json",
    )

    assert response.status_code == 200
    updated = data(response)["task"]
    assert updated["title"] == "Write copy"
    assert updated["priority"] == "high"
    assert updated["startDate"] is not None
    assert updated["description"] is None
    assert updated["assigneeId"] is None
    assert updated["status"] == "in_progress"


def test_update_to_completed_forces_full_progress(auth_client, make_task) -> None:
    task = make_task(progress=30)

    response = auth_client.put(f"/api/tasks/{task.id}", {"status": "completed"}, format="json")

    assert response.status_code == 200
    task.refresh_from_db()
    assert task.status == Status.COMPLETED
    assert task.progress == 100


def test_task_cannot_be_its_own_parent(auth_client, make_task) -> None:
    task = make_task()

    response = auth_client.put(f"/api/tasks/{task.id}", {"parentTaskId": task.id}, format="json")

    assert response.status_code == 400
    assert error(response)["message"] == "A task cannot be its own parent"


def test_update_ignores_project_change(auth_client, project, make_project, make_task) -> None:
    task = make_task()
    elsewhere = make_project(name="Elsewhere")

    response = auth_client.put(f"/api/tasks/{task.id}", {"projectId": elsewhere.id}, format="json")

    assert response.status_code == 200
    task.refresh_from_db()
    assert task.project_id == project.id


def test_full_progress_leaves_status_alone(auth_client, make_task) -> None:
    task = make_task(status=Status.IN_PROGRESS, progress=40)

    response = auth_client.patch(f"/api/tasks/{task.id}/progress", {"progress": 100}, format="json")

    assert response.status_code == 200
    assert data(response)["task"]["progress"] == 100
    task.refresh_from_db()
    assert task.status == Status.IN_PROGRESS


def test_progress_update_is_validated(auth_client, make_task) -> None:
    task = make_task()

    missing = auth_client.patch(f"/api/tasks/{task.id}/progress", {}, format="json")
    too_big = auth_client.patch(f"/api/tasks/{task.id}/progress", {"progress": 150}, format="json")

    assert missing.status_code == 400
    assert error(missing)["message"] == "Progress is required"
    assert too_big.status_code == 400


def test_batch_update_touches_only_owned_tasks(auth_client, make_task, make_project, other_user) -> None:
    mine = [make_task(title=f"Task {index}") for index in range(3)]
    foreign_project = make_project(owner=other_user, name="Bob's")
    foreign = Task.objects.create(title="Bob's task", project=foreign_project)

    response = auth_client.patch(
        "/api/tasks/batch-update",
        {"taskIds": [t.id for t in mine] + [foreign.id], "status": "completed"},
        format="json",
    )

    assert response.status_code == 200
    assert data(response)["updatedCount"] == 3
    for task in mine:
        task.refresh_from_db()
        assert (task.status, task.progress) == (Status.COMPLETED, 100)
    foreign.refresh_from_db()
    assert foreign.status == Status.TODO


def test_batch_update_with_explicit_progress(auth_client, make_task) -> None:
    task = make_task()

    response = auth_client.patch(
        "/api/tasks/batch-update",
        {"taskIds": [task.id], "status": "in_progress", "progress": 25},
        format="json",
    )

    assert response.status_code == 200
    task.refresh_from_db()
    assert (task.status, task.progress) == (Status.IN_PROGRESS, 25)


def test_batch_update_rejects_empty_list(auth_client) -> None:
    response = auth_client.patch("/api/tasks/batch-update", {"taskIds": [], "status": "todo"}, format="json")

    assert response.status_code == 400
    assert error(response)["message"] == "Task ID list cannot be empty"


def test_list_filters(auth_client, user, project, make_project, make_task) -> None:
    make_task(title="Login page", status=Status.IN_PROGRESS, priority=Priority.HIGH, assignee=user)
    make_task(title="Signup page", description="includes captcha", priority=Priority.LOW)
    other_project = make_project(name="Other")
    make_task(title="Invoice export", project=other_project, status=Status.COMPLETED, progress=100)

    def titles(params):
        response = auth_client.get("/api/tasks", params)
        assert response.status_code == 200
        return sorted(t["title"] for t in data(response)["tasks"])

    assert titles({"projectId": project.id}) == ["Login page", "Signup page"]
    assert titles({"status": "in_progress"}) == ["Login page"]
    assert titles({"status": "all"}) == ["Invoice export", "Login page", "Signup page"]
    assert titles({"priority": "low"}) == ["Signup page"]
    assert titles({"assigneeId": user.id}) == ["Login page"]
    assert titles({"assigneeId": "all", "priority": "all"}) == ["Invoice export", "Login page", "Signup page"]
    assert titles({"search": "captcha"}) == ["Signup page"]


def test_list_sorting_and_pagination(auth_client, make_task) -> None:
    for title in ("b", "c", "a"):
        make_task(title=title)

    ascending = data(auth_client.get("/api/tasks", {"sortBy": "title", "sortOrder": "asc"}))
    descending = data(auth_client.get("/api/tasks", {"sortBy": "title"}))
    paged = data(auth_client.get("/api/tasks", {"limit": 2}))

    assert [t["title"] for t in ascending["tasks"]] == ["a", "b", "c"]
    assert [t["title"] for t in descending["tasks"]] == ["c", "b", "a"]
    assert paged["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}


def test_list_rejects_foreign_project_filter(other_client, project) -> None:
    response = other_client.get("/api/tasks", {"projectId": project.id})

    assert response.status_code == 400
    assert error(response)["message"] == "Project not found or access denied"


def test_delete_parent_detaches_subtasks(auth_client, make_task) -> None:
    parent = make_task(title="Parent")
    child = make_task(title="Child", parent_task=parent)

    response = auth_client.delete(f"/api/tasks/{parent.id}")

    assert response.status_code == 200
    assert not Task.objects.filter(pk=parent.id).exists()
    child.refresh_from_db()
    assert child.parent_task_id is None


def test_unsupported_method_is_405(auth_client) -> None:
    response = auth_client.post("/api/tasks/gantt", {}, format="json")

    assert response.status_code == 405
    error(response)


@pytest.mark.parametrize(
    ("url", "params"),
    [
        ("/api/tasks", {"assigneeId": "²"}),
        ("/api/tasks", {"projectId": "²"}),
        ("/api/tasks/gantt", {"projectId": "²"}),
        ("/api/tasks", {"projectId": "abc"}),
    ],
)
def test_non_numeric_id_filters_are_rejected(auth_client, url, params) -> None:
    response = auth_client.get(url, params)

    assert response.status_code == 400
    assert error(response)["message"].endswith("must be a positive integer")


def test_page_past_the_end_is_empty(auth_client, make_task) -> None:
    make_task()

    response = auth_client.get("/api/tasks", {"page": 5})

    assert response.status_code == 200
    paged = data(response)
    assert paged["tasks"] == []
    assert paged["pagination"] == {"page": 5, "limit": 20, "total": 1, "pages": 1}


@pytest.mark.parametrize("page", ["0", "-1", "abc"])
def test_invalid_page_number_is_rejected(auth_client, page) -> None:
    response = auth_client.get("/api/tasks", {"page": page})

    assert response.status_code == 400
    assert error(response)["message"] == "Page must be a positive integer"


def test_batch_update_rejects_non_integer_progress(auth_client, make_task) -> None:
    task = make_task()

    response = auth_client.patch(
        "/api/tasks/batch-update",
        {"taskIds": [task.id], "status": "in_progress", "progress": "abc"},
        format="json",
    )

    assert response.status_code == 400
    assert error(response)["message"] == "Progress must be an integer"
    task.refresh_from_db()
    assert task.status == Status.TODO
