"""Shared pytest fixtures for dyncrud tests."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from dyncrud.runtime.app_factory import create_app
from dyncrud.runtime.service import ModelService


@pytest.fixture
def task_schema() -> dict[str, Any]:
    """Schema requiring a string title and a boolean completed flag."""
    return {
        "type": "object",
        "properties": {
            "title": {"type": "string"},
            "completed": {"type": "boolean"},
        },
        "required": ["title", "completed"],
    }


@pytest.fixture
def person_schema() -> dict[str, Any]:
    """Schema requiring a string name and an integer age."""
    return {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "age": {"type": "integer"},
        },
        "required": ["name", "age"],
    }


@pytest.fixture
def service() -> ModelService:
    """A fresh service with empty registry and store."""
    return ModelService()


@pytest.fixture
def client(service: ModelService) -> TestClient:
    """HTTP client for an app wrapping the ``service`` fixture."""
    return TestClient(create_app(service=service))
