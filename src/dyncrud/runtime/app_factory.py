"""App factory functions.

Convenience functions for creating and running dyncrud applications,
including the ASGI factory for deployment (``uvicorn --factory``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dyncrud.runtime.config import ServerConfig
from dyncrud.runtime.logging import get_logger, setup_logging

if TYPE_CHECKING:
    from fastapi import FastAPI

    from dyncrud.runtime.service import ModelService

logger = get_logger("API")


def create_app(
    config: ServerConfig | None = None,
    service: ModelService | None = None,
) -> FastAPI:
    """
    Create a FastAPI application.

    Args:
        config: Server configuration (defaults if omitted)
        service: Service to expose; each app gets a fresh one by default

    Returns:
        FastAPI application

    Example:
        >>> app = create_app(ServerConfig(strict_schemas=True))
        >>> # Run with uvicorn: uvicorn mymodule:app
    """
    from dyncrud.runtime.server import DynCrudApp

    return DynCrudApp(config, service=service).build()


def create_app_from_env() -> FastAPI:
    """
    ASGI factory reading DYNCRUD_* environment variables.

    Usage: ``uvicorn dyncrud.runtime.app_factory:create_app_from_env --factory``
    """
    config = ServerConfig.from_env()
    setup_logging(config.log_dir, config.log_level)
    return create_app(config)


def run_app(config: ServerConfig | None = None) -> None:
    """
    Run a dyncrud application under uvicorn.

    Args:
        config: Server configuration (host, port, logging, strict schemas)
    """
    import uvicorn

    config = config or ServerConfig()
    app = create_app(config)
    logger.info("Serving on http://%s:%d", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port)
