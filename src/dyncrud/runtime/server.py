"""
Runtime server - builds the FastAPI application around a ModelService.
"""

from __future__ import annotations

from fastapi import FastAPI

from dyncrud.runtime.config import ServerConfig
from dyncrud.runtime.exception_handlers import register_exception_handlers
from dyncrud.runtime.logging import get_logger
from dyncrud.runtime.routes import create_api_router, create_index_router
from dyncrud.runtime.service import ModelService

logger = get_logger("API")

DOCS_URL = "/swagger-ui"
OPENAPI_URL = "/api-docs/openapi.json"


class DynCrudApp:
    """
    dyncrud application builder.

    Creates a complete FastAPI application whose routes share one
    ModelService, stored on ``app.state.model_service``.
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        *,
        service: ModelService | None = None,
    ):
        """
        Initialize the application builder.

        Args:
            config: Server configuration (defaults if omitted)
            service: Service to expose; a fresh one is created when omitted
        """
        self.config = config or ServerConfig()
        if service is None:
            service = ModelService(strict_schemas=self.config.strict_schemas)
        self.service = service

    def build(self) -> FastAPI:
        """Build the FastAPI application."""
        app = FastAPI(
            title=self.config.title,
            description=self.config.description,
            version=self.config.version,
            docs_url=DOCS_URL,
            openapi_url=OPENAPI_URL,
            redoc_url=None,
        )
        app.state.model_service = self.service
        app.state.config = self.config

        register_exception_handlers(app)
        app.include_router(create_index_router())
        app.include_router(create_api_router())

        logger.debug("Built %s %s", self.config.title, self.config.version)
        return app
