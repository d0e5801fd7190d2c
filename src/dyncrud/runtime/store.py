"""
Record store - in-memory JSON records, one id namespace per model.

The store trusts its callers: validation has already happened upstream, so
``create`` always succeeds. Values are deep-copied on the way in and out;
nothing outside the store holds a reference to stored state.
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Callable
from uuid import uuid4

from pydantic import JsonValue

from dyncrud.runtime.errors import RecordNotFoundError
from dyncrud.runtime.logging import get_logger, log_with_context


def generate_id() -> str:
    """Generate a random 128-bit identifier in canonical UUID form."""
    return str(uuid4())


class RecordStore:
    """
    Thread-safe mapping of model name -> record id -> JSON value.

    One lock guards the whole mapping-of-mappings; it is held only for the
    duration of a single lookup or mutation.
    """

    def __init__(self, id_factory: Callable[[], str] = generate_id) -> None:
        self._data: dict[str, dict[str, JsonValue]] = {}
        self._id_factory = id_factory
        self._lock = threading.Lock()
        self._logger = get_logger("STORE")

    def create(self, model_name: str, record: JsonValue) -> str:
        """Insert ``record`` under a fresh id and return the id."""
        value = copy.deepcopy(record)
        record_id = self._id_factory()
        with self._lock:
            self._data.setdefault(model_name, {})[record_id] = value

        log_with_context(
            self._logger,
            logging.INFO,
            f"Created item '{record_id}' in model '{model_name}'",
            model=model_name,
            id=record_id,
        )
        return record_id

    def get(self, model_name: str, record_id: str) -> JsonValue:
        """
        Return a copy of the stored record.

        Raises:
            RecordNotFoundError: If the model or the id does not exist
        """
        with self._lock:
            records = self._data.get(model_name)
            if records is None or record_id not in records:
                raise RecordNotFoundError(model_name, record_id)
            value = records[record_id]
        return copy.deepcopy(value)

    def update(self, model_name: str, record_id: str, record: JsonValue) -> JsonValue:
        """
        Replace a stored record wholesale and return the new value.

        Raises:
            RecordNotFoundError: If the model or the id does not exist
        """
        value = copy.deepcopy(record)
        with self._lock:
            records = self._data.get(model_name)
            if records is None or record_id not in records:
                raise RecordNotFoundError(model_name, record_id)
            records[record_id] = value

        log_with_context(
            self._logger,
            logging.INFO,
            f"Updated item '{record_id}' in model '{model_name}'",
            model=model_name,
            id=record_id,
        )
        return copy.deepcopy(value)

    def delete(self, model_name: str, record_id: str) -> None:
        """
        Remove a stored record.

        Raises:
            RecordNotFoundError: If the model or the id does not exist
        """
        with self._lock:
            records = self._data.get(model_name)
            if records is None or records.pop(record_id, _MISSING) is _MISSING:
                raise RecordNotFoundError(model_name, record_id)

        log_with_context(
            self._logger,
            logging.INFO,
            f"Deleted item '{record_id}' from model '{model_name}'",
            model=model_name,
            id=record_id,
        )

    def count(self, model_name: str) -> int:
        """Number of records stored for ``model_name``."""
        with self._lock:
            return len(self._data.get(model_name, {}))


_MISSING = object()
