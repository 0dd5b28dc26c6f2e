"""Employee records as stored, plus the list read model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Form field names in display order; photo and documents are staged separately.
FORM_FIELDS: tuple[str, ...] = (
    "name",
    "phone",
    "email",
    "national_id",
    "date_of_birth",
    "address",
    "qualification",
    "religion",
    "experience",
    "last_work_place",
    "salary",
)

NUMERIC_FIELDS: frozenset[str] = frozenset({"experience", "salary"})

FORM_DEFAULTS: dict[str, Any] = {name: 0 if name in NUMERIC_FIELDS else "" for name in FORM_FIELDS}


class DocumentInfo(BaseModel):
    """Metadata of an attached document. Content is never kept."""

    name: str
    size: int = Field(..., ge=0)


class Employee(BaseModel):
    """A saved employee record.

    Aliases are the keys of the stored JSON list. Every field has a default so
    that records written before a field existed still load.
    """

    name: str = ""
    phone: str = ""
    email: str | None = None
    national_id: str = Field(default="", alias="nid")
    date_of_birth: str = Field(default="", alias="dob")
    address: str = ""
    qualification: str = ""
    religion: str | None = None
    experience: float = Field(default=0, ge=0, allow_inf_nan=False)
    last_work_place: str | None = Field(default=None, alias="lastWorkPlace")
    salary: float = Field(default=0, ge=0, allow_inf_nan=False)
    photo_data_url: str | None = Field(default=None, alias="photoDataUrl")
    documents: list[DocumentInfo] = []

    model_config = {"populate_by_name": True}

    @classmethod
    def from_form(
        cls,
        values: dict[str, Any],
        photo_data_url: str | None = None,
        documents: list[DocumentInfo] | None = None,
    ) -> Employee:
        data = {name: values.get(name, FORM_DEFAULTS[name]) for name in FORM_FIELDS}
        return cls(
            **data,
            photo_data_url=photo_data_url,
            documents=list(documents or []),
        )

    def form_values(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for name in FORM_FIELDS:
            value = getattr(self, name)
            values[name] = "" if value is None else value
        return values


class DocumentView(DocumentInfo):
    size_label: str


class EmployeeView(Employee):
    """Employee record with its list position and display helpers."""

    index: int
    initials: str
    documents: list[DocumentView] = []
