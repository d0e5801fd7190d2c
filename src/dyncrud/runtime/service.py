"""
Model service - the CRUD contract over registry, compiler and store.

Every create and update passes the validation gate first:

1. look up the model's current schema (NoSuchModelError)
2. compile it, or reuse the cached validator (SchemaCompileError)
3. validate the payload (ValidationFailedError)
4. only then write to the store

Reads and deletes go straight to the store. No lock is held while a schema
compiles or a payload validates.
"""

from __future__ import annotations

import copy
import logging

from pydantic import JsonValue

from dyncrud.runtime.compiler import SchemaCompiler
from dyncrud.runtime.errors import SchemaCompileError, ValidationFailedError
from dyncrud.runtime.logging import get_logger, log_with_context
from dyncrud.runtime.registry import SchemaRegistry
from dyncrud.runtime.store import RecordStore

logger = get_logger("SERVICE")


class ModelService:
    """
    Dynamic CRUD service.

    Owns all process state for one application. Create one per app (or per
    test) and hand it to request handlers; nothing is shared through globals.

    Example:
        service = ModelService()
        service.upload_schema("Task", {"type": "object", "required": ["title"]})
        item_id, data = service.create_item("Task", {"title": "Learn"})
        service.get_item("Task", item_id)
    """

    def __init__(
        self,
        registry: SchemaRegistry | None = None,
        store: RecordStore | None = None,
        compiler: SchemaCompiler | None = None,
        *,
        strict_schemas: bool = False,
    ):
        self.registry = registry if registry is not None else SchemaRegistry()
        self.store = store if store is not None else RecordStore()
        self.compiler = compiler if compiler is not None else SchemaCompiler()
        self.strict_schemas = strict_schemas

    def upload_schema(self, name: str, schema: JsonValue) -> str:
        """
        Register ``schema`` for model ``name`` and return a confirmation message.

        The document is accepted as-is unless strict schemas are enabled, in
        which case a malformed document is rejected and nothing is registered.

        Raises:
            SchemaCompileError: Strict mode only, if the document is not a valid schema
        """
        if self.strict_schemas:
            problems = self.compiler.check(schema)
            if problems:
                log_with_context(
                    logger,
                    logging.WARNING,
                    f"Rejected malformed schema for model '{name}'",
                    model=name,
                    errors=problems,
                )
                raise SchemaCompileError(problems[0])

        self.registry.register(name, schema)
        self.compiler.invalidate(name)
        return f"Schema for '{name}' uploaded successfully."

    def _validate(self, model_name: str, payload: JsonValue) -> None:
        entry = self.registry.lookup(model_name)
        compiled = self.compiler.compile_entry(entry)
        errors = self.compiler.validate(compiled, payload)
        if errors:
            log_with_context(
                logger,
                logging.WARNING,
                f"Validation failed for model '{model_name}'",
                model=model_name,
                revision=entry.revision,
                error_count=len(errors),
            )
            raise ValidationFailedError(errors)

    def create_item(self, model_name: str, payload: JsonValue) -> tuple[str, JsonValue]:
        """
        Validate ``payload`` and store it under a new id.

        Returns:
            The generated id and the stored value

        Raises:
            NoSuchModelError: If the model has no schema
            ValidationFailedError: If the payload (or the schema) is invalid
        """
        self._validate(model_name, payload)
        record_id = self.store.create(model_name, payload)
        return record_id, copy.deepcopy(payload)

    def get_item(self, model_name: str, record_id: str) -> JsonValue:
        """Return a stored record. Raises RecordNotFoundError."""
        return self.store.get(model_name, record_id)

    def update_item(self, model_name: str, record_id: str, payload: JsonValue) -> JsonValue:
        """
        Validate ``payload`` and replace the stored record with it.

        Validation runs before the existence check, so an invalid payload for
        a missing id reports the validation failure.

        Raises:
            NoSuchModelError: If the model has no schema
            ValidationFailedError: If the payload (or the schema) is invalid
            RecordNotFoundError: If the id does not exist in the model
        """
        self._validate(model_name, payload)
        return self.store.update(model_name, record_id, payload)

    def delete_item(self, model_name: str, record_id: str) -> None:
        """Delete a stored record. Raises RecordNotFoundError."""
        self.store.delete(model_name, record_id)
