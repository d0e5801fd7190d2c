"""
dyncrud - Dynamic CRUD API.

Define a data model at runtime by uploading a JSON Schema, then create, read,
update and delete instances of that model. Every write is validated against
the model's current schema.

This package provides:
- ModelService: schema registry + record store behind a validation gate
- create_app: FastAPI application exposing the service over HTTP
"""

from dyncrud._version import get_version as _get_version

__version__ = _get_version()

from dyncrud.runtime.service import ModelService

__all__ = ["ModelService", "__version__"]
