"""
Request/response models for the HTTP API.

Payloads and schemas are arbitrary JSON values, so they are typed ``Any``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

TASK_SCHEMA_EXAMPLE = {
    "name": "Task",
    "schema": {
        "type": "object",
        "properties": {
            "title": {"type": "string"},
            "completed": {"type": "boolean"},
        },
        "required": ["title", "completed"],
    },
}


class SchemaUpload(BaseModel):
    """Body of a schema upload: the model name and its JSON Schema."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [TASK_SCHEMA_EXAMPLE]},
    )

    name: str
    # "schema" would shadow BaseModel.schema, so the field is aliased
    schema_: Any = Field(alias="schema")


class StatusMessage(BaseModel):
    """Plain success/error acknowledgement."""

    status: str = "success"
    message: str


class ItemCreated(BaseModel):
    """Response to a successful create."""

    status: str = "success"
    id: str
    data: Any


class ItemFound(BaseModel):
    """Response carrying one stored record."""

    status: str = "success"
    data: Any


class ItemUpdated(BaseModel):
    """Response to a successful update, carrying the new value."""

    status: str = "success"
    message: str
    data: Any


class ErrorResponse(BaseModel):
    """Body of every error response produced by the runtime."""

    status: str = "error"
    message: str
    type: str
    errors: list[str] | None = None
