# tests/conftest.py

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from project.models import Project
from projectflow.jwt_auth import issue_access_token
from task.models import Task

User = get_user_model()

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def _test_settings(settings, tmp_path):
    """Fast password hashing and a throwaway upload directory per test."""
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    settings.MEDIA_ROOT = tmp_path / "media"


@pytest.fixture()
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture()
def user(db):
    return User.objects.create_user(username="alice", email="alice@example.com", password=PASSWORD)


@pytest.fixture()
def other_user(db):
    return User.objects.create_user(username="bob", email="bob@example.com", password=PASSWORD)


def _client_for(user) -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_access_token(user)}")
    return client


@pytest.fixture()
def auth_client(user) -> APIClient:
    return _client_for(user)


@pytest.fixture()
def other_client(other_user) -> APIClient:
    return _client_for(other_user)


@pytest.fixture()
def make_project(user):
    def make(owner=None, **fields):
        fields.setdefault("name", "Website relaunch")
        return Project.objects.create(owner=owner or user, **fields)

    return make


@pytest.fixture()
def project(make_project):
    return make_project()


@pytest.fixture()
def make_task(project):
    def make(**fields):
        fields.setdefault("title", "Write copy")
        fields.setdefault("project", project)
        return Task.objects.create(**fields)

    return make
