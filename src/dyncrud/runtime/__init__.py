"""
dyncrud runtime.

Schema registry, record store and validation gate, plus the FastAPI
application that exposes them.
"""

from dyncrud.runtime.app_factory import create_app, run_app
from dyncrud.runtime.config import ServerConfig
from dyncrud.runtime.errors import (
    DynCrudError,
    NoSuchModelError,
    RecordNotFoundError,
    SchemaCompileError,
    ValidationFailedError,
)
from dyncrud.runtime.service import ModelService

__all__ = [
    "DynCrudError",
    "ModelService",
    "NoSuchModelError",
    "RecordNotFoundError",
    "SchemaCompileError",
    "ServerConfig",
    "ValidationFailedError",
    "create_app",
    "run_app",
]
