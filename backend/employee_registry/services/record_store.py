"""Ordered in-memory employee list, written through to a key-value store."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from employee_registry.core.config import Settings
from employee_registry.core.signals import Signal
from employee_registry.core.storage import MemoryStorage, StorageAdapter, StorageError, build_storage
from employee_registry.models.employee import Employee

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "employees"


class PersistenceError(Exception):
    pass


def serialize_records(records: list[Employee]) -> str:
    return json.dumps([record.model_dump(mode="json", by_alias=True) for record in records])


def parse_records(raw: str | None) -> list[Employee]:
    """Parse a stored list. Anything that is not a JSON list yields ``[]``."""
    if not raw:
        return []
    try:
        data: Any = json.loads(raw)
    except ValueError:
        logger.warning("Stored employee list is not valid JSON, starting empty")
        return []
    if not isinstance(data, list):
        logger.warning("Stored employee data is %s, not a list, starting empty", type(data).__name__)
        return []

    records: list[Employee] = []
    for position, item in enumerate(data):
        try:
            records.append(Employee.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping stored record #%d: %s", position, e.errors()[:1])
    return records


class RecordStore:
    def __init__(self, storage: StorageAdapter | None = None, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage: StorageAdapter = storage if storage is not None else MemoryStorage()
        self.key = key
        self.records: Signal[list[Employee]] = Signal([])
        self.dirty = False
        self.initialized = False

    def initialize(self, settings: Settings) -> None:
        self.storage = build_storage(settings)
        self.key = settings.STORAGE_KEY
        self.load()
        self.initialized = True
        logger.info("RecordStore initialized (key=%s, records=%d)", self.key, len(self))

    def close(self) -> None:
        self.records.set([])
        self.dirty = False
        self.initialized = False

    def __len__(self) -> int:
        return len(self.records())

    def all(self) -> list[Employee]:
        return list(self.records())

    def get(self, index: int) -> Employee | None:
        if not self._in_bounds(index):
            return None
        return self.records()[index]

    def load(self) -> list[Employee]:
        try:
            raw = self.storage.get_item(self.key)
        except StorageError:
            logger.exception("Failed to read stored employees, starting empty")
            raw = None
        records = parse_records(raw)
        self.records.set(records)
        self.dirty = False
        return list(records)

    def replace_all(self, records: list[Employee]) -> None:
        self.records.set(list(records))
        self._persist()

    def prepend(self, record: Employee) -> None:
        self.records.set([record, *self.records()])
        self._persist()

    def update_at(self, index: int, record: Employee) -> bool:
        if not self._in_bounds(index):
            logger.warning("update_at(%d) ignored: list has %d records", index, len(self))
            return False
        updated = list(self.records())
        updated[index] = record
        self.records.set(updated)
        self._persist()
        return True

    def remove_at(self, index: int) -> Employee | None:
        if not self._in_bounds(index):
            logger.warning("remove_at(%d) ignored: list has %d records", index, len(self))
            return None
        remaining = list(self.records())
        removed = remaining.pop(index)
        self.records.set(remaining)
        self._persist()
        return removed

    def flush(self) -> None:
        """Write the current list again, e.g. after an earlier write failed."""
        self._persist()

    def _in_bounds(self, index: int) -> bool:
        return 0 <= index < len(self.records())

    def _persist(self) -> None:
        try:
            self.storage.set_item(self.key, serialize_records(self.records()))
        except StorageError as err:
            self.dirty = True
            logger.exception("Failed to persist %d employees", len(self))
            raise PersistenceError(f"Employees changed in memory but could not be saved: {err}") from err
        self.dirty = False


record_store = RecordStore()
