"""
Schema compiler - turns registered JSON Schema documents into validators.

Thin adapter over ``jsonschema``: the dialect is picked from the document's
``$schema`` keyword (Draft 2020-12 when absent), the document is checked
against that dialect's metaschema, and payloads are validated with
``iter_errors`` so every violation is reported, not just the first.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from jsonschema.exceptions import ValidationError as JsonSchemaValidationError
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for
from pydantic import JsonValue
from referencing.exceptions import Unresolvable

from dyncrud.runtime.errors import SchemaCompileError
from dyncrud.runtime.logging import get_logger, log_with_context
from dyncrud.runtime.registry import SchemaEntry

CompiledSchema = Validator

DEFAULT_DIALECT = Draft202012Validator

logger = get_logger("COMPILER")


def format_error(error: JsonSchemaValidationError) -> str:
    """Render one validation error, prefixed by its JSON path unless at the root."""
    path = error.json_path
    if path == "$":
        return error.message
    return f"{path}: {error.message}"


def _dialect_for(schema: JsonValue) -> type[Validator]:
    if not isinstance(schema, (dict, bool)):
        raise SchemaCompileError(
            f"{schema!r} is not a valid schema: expected an object or a boolean"
        )
    if isinstance(schema, dict) and not isinstance(schema.get("$schema", ""), str):
        raise SchemaCompileError(
            f"$schema: {schema['$schema']!r} is not of type 'string'"
        )
    try:
        return validator_for(schema, default=DEFAULT_DIALECT)
    except TypeError as e:
        raise SchemaCompileError(f"Cannot determine schema dialect: {e}") from e


class SchemaCompiler:
    """
    Compiles schemas and validates instances against them.

    Compiled validators are cached per model name together with the registry
    revision they were built from; a replaced schema always recompiles.
    """

    def __init__(self) -> None:
        self._cache: dict[str, tuple[int, CompiledSchema]] = {}
        self._lock = threading.Lock()

    def check(self, schema: JsonValue) -> list[str]:
        """
        List the metaschema violations of a schema document.

        An empty list means the document compiles.
        """
        try:
            cls = _dialect_for(schema)
        except SchemaCompileError as e:
            return e.errors
        meta_cls = validator_for(cls.META_SCHEMA, default=cls)
        meta_validator = meta_cls(cls.META_SCHEMA, format_checker=cls.FORMAT_CHECKER)
        errors = sorted(meta_validator.iter_errors(schema), key=lambda e: e.json_path)
        return [format_error(e) for e in errors]

    def compile(self, schema: JsonValue) -> CompiledSchema:
        """
        Compile a schema document.

        Raises:
            SchemaCompileError: If the document is not a valid schema
        """
        cls = _dialect_for(schema)
        try:
            cls.check_schema(schema)
        except SchemaError as e:
            raise SchemaCompileError(format_error(e)) from e
        return cls(schema)

    def compile_entry(self, entry: SchemaEntry) -> CompiledSchema:
        """Compile a registry entry, reusing the cached validator for its revision."""
        with self._lock:
            cached = self._cache.get(entry.name)
        if cached is not None and cached[0] == entry.revision:
            return cached[1]

        try:
            compiled = self.compile(entry.schema)
        except SchemaCompileError as e:
            log_with_context(
                logger,
                logging.WARNING,
                f"Schema for model '{entry.name}' does not compile",
                model=entry.name,
                revision=entry.revision,
                error=e.detail,
            )
            raise

        with self._lock:
            current = self._cache.get(entry.name)
            # Never let a slow compile of an older revision overwrite a newer one
            if current is None or current[0] < entry.revision:
                self._cache[entry.name] = (entry.revision, compiled)
        return compiled

    def validate(self, compiled: CompiledSchema, instance: Any) -> list[str]:
        """
        Validate ``instance`` and return one description per violation.

        Raises:
            SchemaCompileError: If the schema holds a ``$ref`` that cannot be
                resolved or that loops back on itself without consuming input
        """
        try:
            errors = sorted(compiled.iter_errors(instance), key=lambda e: e.json_path)
        except Unresolvable as e:
            raise SchemaCompileError(f"Unresolvable reference: {e}") from e
        except RecursionError as e:
            raise SchemaCompileError(f"Schema reference cycle: {e}") from e
        return [format_error(e) for e in errors]

    def invalidate(self, name: str) -> None:
        """Drop the cached validator for ``name``."""
        with self._lock:
            self._cache.pop(name, None)
