"""
HTTP routes for the dynamic CRUD API.

Handlers are plain functions, so FastAPI runs them in its worker thread
pool; the service's locks make concurrent requests safe. Domain errors
propagate to the handlers in ``exception_handlers``.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import PlainTextResponse

from dyncrud.runtime.models import (
    ErrorResponse,
    ItemCreated,
    ItemFound,
    ItemUpdated,
    SchemaUpload,
    StatusMessage,
)
from dyncrud.runtime.service import ModelService

WELCOME_TEXT = (
    "Welcome to the Dynamic CRUD API. Please visit /swagger-ui/ to explore the API."
)

_VALIDATION_FAILED = {"model": ErrorResponse, "description": "Validation failed"}
_NOT_FOUND = {"model": ErrorResponse, "description": "Item not found"}


def get_model_service(request: Request) -> ModelService:
    """Dependency: the service owned by the running application."""
    service: ModelService = request.app.state.model_service
    return service


ServiceDep = Annotated[ModelService, Depends(get_model_service)]


def create_index_router() -> APIRouter:
    """Router for the landing page."""
    router = APIRouter()

    @router.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def index() -> str:
        return WELCOME_TEXT

    return router


def create_api_router() -> APIRouter:
    """
    Create the /api router.

    ``/api/schema`` is registered before ``/api/{model_name}`` so schema
    uploads are never taken for item creation.
    """
    router = APIRouter(prefix="/api")

    @router.post(
        "/schema",
        response_model=StatusMessage,
        tags=["Schemas"],
        responses={400: {"model": ErrorResponse, "description": "Malformed schema"}},
    )
    def upload_schema(upload: SchemaUpload, service: ServiceDep) -> StatusMessage:
        """Upload (or replace) the JSON Schema of a model."""
        message = service.upload_schema(upload.name, upload.schema_)
        return StatusMessage(message=message)

    @router.post(
        "/{model_name}",
        status_code=201,
        response_model=ItemCreated,
        tags=["Items"],
        responses={400: _VALIDATION_FAILED},
    )
    def create_item(
        model_name: str,
        service: ServiceDep,
        payload: Annotated[
            Any,
            Body(
                description="Item conforming to the model's schema",
                openapi_examples={
                    "task": {"value": {"title": "Learn FastAPI", "completed": False}}
                },
            ),
        ],
    ) -> ItemCreated:
        """Validate and store a new item."""
        item_id, data = service.create_item(model_name, payload)
        return ItemCreated(id=item_id, data=data)

    @router.get(
        "/{model_name}/{id}",
        response_model=ItemFound,
        tags=["Items"],
        responses={404: _NOT_FOUND},
    )
    def get_item(model_name: str, id: str, service: ServiceDep) -> ItemFound:
        """Fetch one item by id."""
        return ItemFound(data=service.get_item(model_name, id))

    @router.put(
        "/{model_name}/{id}",
        response_model=ItemUpdated,
        tags=["Items"],
        responses={400: _VALIDATION_FAILED, 404: _NOT_FOUND},
    )
    def update_item(
        model_name: str,
        id: str,
        service: ServiceDep,
        payload: Annotated[
            Any,
            Body(
                description="Replacement item; the stored value is replaced wholesale",
                openapi_examples={
                    "task": {"value": {"title": "Master FastAPI", "completed": True}}
                },
            ),
        ],
    ) -> ItemUpdated:
        """Validate a replacement and overwrite the stored item."""
        data = service.update_item(model_name, id, payload)
        return ItemUpdated(message=f"Item with ID '{id}' updated successfully", data=data)

    @router.delete(
        "/{model_name}/{id}",
        response_model=StatusMessage,
        tags=["Items"],
        responses={404: _NOT_FOUND},
    )
    def delete_item(model_name: str, id: str, service: ServiceDep) -> StatusMessage:
        """Delete an item."""
        service.delete_item(model_name, id)
        return StatusMessage(message=f"Item with ID '{id}' deleted successfully")

    return router
