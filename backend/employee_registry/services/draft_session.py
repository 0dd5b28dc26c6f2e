"""The record currently being composed or edited, before it is saved."""

from __future__ import annotations

import logging
from typing import Any

from employee_registry.core.signals import Computed, Signal
from employee_registry.models.employee import FORM_DEFAULTS, FORM_FIELDS, NUMERIC_FIELDS, DocumentInfo, Employee
from employee_registry.services.record_store import PersistenceError, RecordStore, record_store
from employee_registry.services.validator import validate

logger = logging.getLogger(__name__)


class DraftSessionError(Exception):
    pass


class DraftValidationError(DraftSessionError):
    def __init__(self, errors: dict[str, set[str]]) -> None:
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(f"Draft has invalid fields: {fields}")


class DraftSession:
    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self.fields: Signal[dict[str, Any]] = Signal(dict(FORM_DEFAULTS))
        self.editing_index: Signal[int | None] = Signal(None)
        self.photo_preview: Signal[str | None] = Signal(None)
        self.staged_documents: Signal[list[DocumentInfo]] = Signal([])
        self.touched: Signal[frozenset[str]] = Signal(frozenset())
        self.notice: Signal[str | None] = Signal(None)
        self.is_editing: Computed[bool] = Computed(lambda: self.editing_index() is not None)
        self._photo_token = 0

    # ===== Form state =====
    def start_new(self) -> None:
        self.fields.set(dict(FORM_DEFAULTS))
        self.photo_preview.set(None)
        self.staged_documents.set([])
        self.editing_index.set(None)
        self.touched.set(frozenset())
        self.notice.set(None)
        self._photo_token += 1

    def start_edit(self, index: int) -> None:
        record = self.store.get(index)
        if record is None:
            raise DraftSessionError(f"No employee at index {index}")

        self.fields.set(record.form_values())
        self.photo_preview.set(record.photo_data_url or None)
        self.staged_documents.set(list(record.documents))
        self.editing_index.set(index)
        self.touched.set(frozenset())
        self.notice.set(None)
        self._photo_token += 1
        logger.debug("Editing employee #%d", index)

    def get_field(self, name: str) -> Any:
        self._check_field(name)
        return self.fields()[name]

    def set_field(self, name: str, value: Any) -> None:
        self.update_fields({name: value})

    def update_fields(self, values: dict[str, Any]) -> None:
        for name in values:
            self._check_field(name)
        updated = dict(self.fields())
        for name, value in values.items():
            updated[name] = self._normalize(name, value)
        self.fields.set(updated)
        self.touched.set(self.touched() | frozenset(values))

    @staticmethod
    def _normalize(name: str, value: Any) -> Any:
        # A cleared number input arrives as an empty string.
        if value is None or (name in NUMERIC_FIELDS and isinstance(value, str) and not value.strip()):
            return FORM_DEFAULTS[name]
        return value

    def errors(self) -> dict[str, set[str]]:
        return validate(self.fields())

    def _check_field(self, name: str) -> None:
        if name not in FORM_DEFAULTS:
            raise DraftSessionError(f"Unknown form field: {name}")

    # ===== Photo =====
    def set_photo(self, data_url: str) -> None:
        self.photo_preview.set(data_url)

    def clear_photo(self) -> None:
        self._photo_token += 1
        self.photo_preview.set(None)

    def begin_photo_read(self) -> int:
        """Register a new photo selection; only the latest one may apply."""
        self._photo_token += 1
        return self._photo_token

    def finish_photo_read(self, token: int, data_url: str) -> bool:
        if token != self._photo_token:
            logger.info("Discarding stale photo read (token=%d, current=%d)", token, self._photo_token)
            return False
        self.set_photo(data_url)
        return True

    def fail_photo_read(self, token: int, message: str) -> None:
        # The previous preview stays in place.
        logger.warning("Photo read failed (token=%d): %s", token, message)
        if token == self._photo_token:
            self.notice.set(f"Photo could not be read: {message}")

    # ===== Documents =====
    def add_documents(self, documents: list[DocumentInfo]) -> None:
        if not documents:
            return
        self.staged_documents.set([*self.staged_documents(), *documents])

    def remove_staged_document(self, index: int) -> DocumentInfo:
        staged = list(self.staged_documents())
        if not 0 <= index < len(staged):
            raise DraftSessionError(f"No staged document at index {index}")
        removed = staged.pop(index)
        self.staged_documents.set(staged)
        return removed

    # ===== CRUD =====
    def commit(self) -> int:
        """Save the draft as a new or updated record and return its index."""
        errors = self.errors()
        if errors:
            self.touched.set(frozenset(FORM_FIELDS))
            raise DraftValidationError(errors)

        record = Employee.from_form(
            self.fields(),
            photo_data_url=self.photo_preview(),
            documents=self.staged_documents(),
        )
        index = self.editing_index()
        try:
            if index is None:
                self.store.prepend(record)
                index = 0
                logger.info("Created employee (total=%d)", len(self.store))
            else:
                if not self.store.update_at(index, record):
                    raise DraftSessionError(f"No employee at index {index}")
                logger.info("Updated employee #%d", index)
        except PersistenceError as err:
            self.start_new()
            self.notice.set(str(err))
            raise
        self.start_new()
        return index

    def submit_create(self) -> int:
        if self.is_editing():
            raise DraftSessionError("Draft is editing an existing employee; submit an update instead")
        return self.commit()

    def submit_update(self) -> int:
        if not self.is_editing():
            raise DraftSessionError("Draft is not editing an employee")
        return self.commit()

    def delete(self, index: int) -> Employee:
        editing = self.editing_index()
        try:
            removed = self.store.remove_at(index)
        except PersistenceError as err:
            self._follow_removal(editing, index)
            self.notice.set(str(err))
            raise
        if removed is None:
            raise DraftSessionError(f"No employee at index {index}")
        self._follow_removal(editing, index)
        logger.info("Deleted employee #%d", index)
        return removed

    def _follow_removal(self, editing: int | None, removed_index: int) -> None:
        if editing is None:
            return
        if editing == removed_index:
            self.start_new()
        elif editing > removed_index:
            self.editing_index.set(editing - 1)


draft_session = DraftSession(record_store)
