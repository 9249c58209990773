# tests/helpers.py

from __future__ import annotations

from datetime import datetime

from django.utils import timezone


def aware(year: int, month: int, day: int) -> datetime:
    return timezone.make_aware(datetime(year, month, day))


def data(response) -> dict:
    """The ``data`` member of a successful envelope."""
    body = response.json()
    assert body["success"] is True, body
    return body["data"]


def error(response) -> dict:
    body = response.json()
    assert body["success"] is False, body
    return body
