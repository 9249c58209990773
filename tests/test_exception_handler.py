# tests/test_exception_handler.py

from __future__ import annotations

import pytest
from django.http import Http404
from rest_framework import exceptions, serializers

from utils.exception_handler import envelope_exception_handler

pytestmark = pytest.mark.django_db


class FakeView:
    not_found_message = "Widget not found"


def test_validation_errors_carry_field_messages() -> None:
    exc = serializers.ValidationError({"title": ["Task title is required"], "progress": ["Progress must be between 0 and 100"]})

    response = envelope_exception_handler(exc, {"view": FakeView()})

    assert response.status_code == 400
    assert response.data["success"] is False
    assert response.data["message"] == "Task title is required, Progress must be between 0 and 100"
    assert response.data["errors"] == {
        "title": ["Task title is required"],
        "progress": ["Progress must be between 0 and 100"],
    }


def test_non_field_validation_errors() -> None:
    response = envelope_exception_handler(serializers.ValidationError("Nope"), {"view": FakeView()})

    assert response.data["errors"] == {"non_field_errors": ["Nope"]}


def test_http404_uses_the_views_message() -> None:
    response = envelope_exception_handler(Http404(), {"view": FakeView()})

    assert response.status_code == 404
    assert response.data == {"success": False, "message": "Widget not found"}


def test_not_found_without_view_message() -> None:
    response = envelope_exception_handler(Http404(), {"view": object()})

    assert response.data["message"] == "Resource not found"


def test_method_not_allowed_message() -> None:
    exc = exceptions.MethodNotAllowed("POST")

    response = envelope_exception_handler(exc, {"view": FakeView()})

    assert response.status_code == 405
    assert response.data["message"] == 'Method "POST" not allowed.'


def test_unexpected_errors_become_a_generic_500(settings, caplog) -> None:
    settings.DEBUG = False

    response = envelope_exception_handler(RuntimeError("database on fire"), {"view": FakeView()})

    assert response.status_code == 500
    assert response.data == {"success": False, "message": "Internal server error"}
    assert "database on fire" in caplog.text


def test_debug_500_includes_the_stack(settings) -> None:
    settings.DEBUG = True

    response = envelope_exception_handler(RuntimeError("boom"), {"view": FakeView()})

    assert any("RuntimeError: boom" in line for line in response.data["stack"])
