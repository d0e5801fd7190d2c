"""
Schema registry - maps model names to JSON Schema documents.

A flat, last-write-wins mapping. Registration never inspects the document;
malformed schemas surface later when the compiler sees them.
"""

from __future__ import annotations

import copy
import itertools
import logging
import threading
from dataclasses import dataclass

from pydantic import JsonValue

from dyncrud.runtime.errors import NoSuchModelError
from dyncrud.runtime.logging import get_logger, log_with_context


@dataclass(frozen=True)
class SchemaEntry:
    """One registration of a schema under a model name."""

    name: str
    schema: JsonValue
    revision: int


class SchemaRegistry:
    """
    Thread-safe registry of model schemas.

    Each ``register`` call gets a fresh revision number, so anything derived
    from a schema (compiled validators) can tell a replacement apart from the
    entry it was built from, even when the document is identical.
    """

    def __init__(self) -> None:
        self._entries: dict[str, SchemaEntry] = {}
        self._revisions = itertools.count(1)
        self._lock = threading.Lock()
        self._logger = get_logger("REGISTRY")

    def register(self, name: str, schema: JsonValue) -> SchemaEntry:
        """
        Register ``schema`` under ``name``, replacing any previous schema.

        Args:
            name: Model name (case-sensitive)
            schema: JSON Schema document, stored as a private copy

        Returns:
            The new registry entry
        """
        document = copy.deepcopy(schema)
        with self._lock:
            replaced = name in self._entries
            entry = SchemaEntry(name=name, schema=document, revision=next(self._revisions))
            self._entries[name] = entry

        log_with_context(
            self._logger,
            logging.INFO,
            f"Schema {'replaced' if replaced else 'registered'} for model '{name}'",
            model=name,
            revision=entry.revision,
        )
        return entry

    def get(self, name: str) -> SchemaEntry | None:
        """Return the current entry for ``name``, or None."""
        with self._lock:
            return self._entries.get(name)

    def lookup(self, name: str) -> SchemaEntry:
        """
        Return the current entry for ``name``.

        Raises:
            NoSuchModelError: If no schema is registered under ``name``
        """
        entry = self.get(name)
        if entry is None:
            raise NoSuchModelError(name)
        return entry

    def names(self) -> list[str]:
        """Registered model names, sorted."""
        with self._lock:
            return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
